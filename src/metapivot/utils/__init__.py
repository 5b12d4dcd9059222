"""Utility functions"""
from .similarity import tokenize_name, jaccard_similarity, name_similarity, closest_name

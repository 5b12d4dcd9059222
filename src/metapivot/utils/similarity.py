"""Name similarity for spotting typos and renamed columns.

Metadata keys are hand-authored, so a missing key is usually a near-miss
of a real one: 'satisfacton' for 'satisfaction', 'Q1 Trust' for 'q1_trust'.
"""
import re
from typing import Iterable, Optional, Set, Tuple


def tokenize_name(name: str) -> Set[str]:
    """Extract lowercase word tokens from a column name."""
    if not name:
        return set()
    return set(re.findall(r'[a-z0-9]+', str(name).lower()))


def _bigrams(name: str) -> Set[str]:
    compact = re.sub(r'[^a-z0-9]', '', str(name).lower())
    if len(compact) < 2:
        return {compact} if compact else set()
    return {compact[i:i + 2] for i in range(len(compact) - 1)}


def jaccard_similarity(set1: Set[str], set2: Set[str]) -> float:
    """Calculate Jaccard similarity between two sets."""
    if not set1 and not set2:
        return 1.0
    intersection = len(set1 & set2)
    union = len(set1 | set2)
    return intersection / union if union > 0 else 0.0


def name_similarity(name1: str, name2: str) -> float:
    """Similarity of two names (0.0-1.0): best of word-token and character-bigram overlap."""
    return max(
        jaccard_similarity(tokenize_name(name1), tokenize_name(name2)),
        jaccard_similarity(_bigrams(name1), _bigrams(name2)),
    )


def closest_name(name: str, candidates: Iterable[str], threshold: float = 0.5) -> Tuple[Optional[str], float]:
    """
    Find the candidate most similar to `name`.

    Returns (best_match, score), or (None, score) if below threshold.
    """
    best_match, best_score = None, 0.0
    for candidate in candidates:
        score = name_similarity(name, candidate)
        if score > best_score:
            best_match, best_score = candidate, score
    if best_score >= threshold:
        return best_match, best_score
    return None, best_score

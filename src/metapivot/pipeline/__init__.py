"""Pipeline configuration and execution"""
from .config import PivotConfig, OrderingRule, save_config, load_config
from .runner import PipelineResult, run_pipeline

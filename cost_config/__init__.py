"""
Configuration for the cost tracker.

Single public entry point for runtime settings:

    from cost_config import load_config
    config = load_config()
"""

from cost_config.loader import load_config, load_yaml_file
from cost_config.schema import CostTrackerConfig

__all__ = [
    "CostTrackerConfig",
    "load_config",
    "load_yaml_file",
]

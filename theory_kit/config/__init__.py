"""
Configuration management for theory_kit.

Environment settings, the system strategy and named strategy profiles.
"""

from .configuration import default_prng, system_strategy
from .environment import EnvironmentConfig, get_environment_config
from .profiles import ProfileRegistry

__all__ = [
    "EnvironmentConfig",
    "ProfileRegistry",
    "default_prng",
    "get_environment_config",
    "system_strategy",
]

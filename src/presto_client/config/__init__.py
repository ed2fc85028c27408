"""Configuration helpers for the Presto client."""

from .env import get_env_bool, get_env_float, get_env_int, get_env_str
from .settings import PrestoConfig

__all__ = [
    "PrestoConfig",
    "get_env_bool",
    "get_env_float",
    "get_env_int",
    "get_env_str",
]

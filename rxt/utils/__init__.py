"""RXT utilities package.

This package contains utility functions for YAML parsing, logging,
and other cross-cutting concerns.
"""

from rxt.utils.logging import JSONFormatter, setup_logging
from rxt.utils.yaml_parser import load_yaml, substitute_env_vars

__all__ = [
    "JSONFormatter",
    "load_yaml",
    "setup_logging",
    "substitute_env_vars",
]

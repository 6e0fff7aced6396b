"""Extractor configuration files.

An extractor configuration file is a YAML mapping of the configuration
keys (``driver``, ``url``, ``userName``, ``userPassword``, ``query``,
``queryCount``). String values may reference environment variables as
``${NAME}`` or ``${NAME:-fallback}``, so credentials need not be written
into the file.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Union

import yaml

from rxt.exceptions import ConfigurationError

_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::-(?P<fallback>[^}]*))?\}")


def _expand(text: str) -> str:
    def lookup(match: re.Match) -> str:
        name = match.group("name")
        if name in os.environ:
            return os.environ[name]
        fallback = match.group("fallback")
        if fallback is None:
            raise ConfigurationError(
                f"Variable '${{{name}}}' is not set in the environment and has no fallback"
            )
        return fallback

    return _REFERENCE.sub(lookup, text)


def substitute_env_vars(value: Any) -> Any:
    """Resolve ``${NAME}`` references in every string of a parsed document.

    Mappings and lists are walked recursively; non-string scalars are
    returned unchanged.

    Raises:
        ConfigurationError: If a referenced variable is unset and the
            reference gives no fallback

    Examples:
        >>> os.environ["RXT_DB"] = "/tmp/orders.db"
        >>> substitute_env_vars({"url": "sqlite:///${RXT_DB}", "userName": "${RXT_USER:-}"})
        {'url': 'sqlite:////tmp/orders.db', 'userName': ''}
    """
    if isinstance(value, str):
        return _expand(value)
    if isinstance(value, dict):
        return {key: substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


def load_yaml(path: Union[str, Path]) -> dict[str, Any]:
    """Read an extractor configuration file.

    Raises:
        ConfigurationError: If the file is unreadable, is not valid YAML,
            is empty or holds something other than a mapping, or references
            an unset variable
    """
    path = Path(path)
    try:
        document = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ConfigurationError(f"Failed to read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if document is None:
        raise ConfigurationError(f"Empty YAML file: {path}")
    if not isinstance(document, dict):
        raise ConfigurationError(
            f"Expected a mapping in {path}, got {type(document).__name__}"
        )
    return substitute_env_vars(document)

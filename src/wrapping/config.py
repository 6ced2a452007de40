"""
Wrapping Configuration

User options are deep-merged over the defaults below, then parsed into an
immutable WrappingConfig:

{
  "softener": {
    "default": 1.0,            // factor applied to average line length
    "gitcommit": false         // per-filetype factor, or true/false to force soft/hard
  },
  "create_commands": true,
  "create_keymaps": true,
  "auto_set_mode_heuristically": true,
  "auto_set_mode_filetype_allowlist": ["asciidoc", "gitcommit", ...],
  "auto_set_mode_filetype_denylist": []
}

Lists replace the default list wholesale, so a denylist only takes effect
when the allowlist is emptied at the same time.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from wrapping.exceptions import ConfigError, MutuallyExclusiveListsError
from wrapping.logging_config import logger
from wrapping.schemas import Softener, SoftenerFactor, SoftenerOverride


# Default configuration
OPTION_DEFAULTS: Dict[str, Any] = {
    "softener": {
        "default": 1.0,
        "gitcommit": False,  # Commit messages are conventionally hard-wrapped at 72
    },
    "create_commands": True,
    "create_keymaps": True,
    "auto_set_mode_heuristically": True,
    "auto_set_mode_filetype_allowlist": [
        "asciidoc",
        "gitcommit",
        "mail",
        "markdown",
        "text",
        "tex",
    ],
    "auto_set_mode_filetype_denylist": [],
}


class WrappingConfig(BaseModel):
    """
    Resolved, immutable plugin configuration.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    softener: Dict[str, Union[bool, float]]
    create_commands: bool
    create_keymaps: bool
    auto_set_mode_heuristically: bool
    auto_set_mode_filetype_allowlist: FrozenSet[str]
    auto_set_mode_filetype_denylist: FrozenSet[str]

    @field_validator("softener", mode="before")
    @classmethod
    def _check_softener(cls, value: Any) -> Dict[str, Union[bool, float]]:
        if not isinstance(value, dict):
            raise ValueError("softener must be a table of filetype -> number|boolean")

        checked: Dict[str, Union[bool, float]] = {}
        for filetype, factor in value.items():
            if isinstance(factor, bool):
                checked[filetype] = factor
            elif isinstance(factor, (int, float)):
                checked[filetype] = float(factor)
            else:
                raise ValueError(
                    f"softener.{filetype} must be a number or a boolean, got {factor!r}"
                )

        if isinstance(checked.get("default"), bool) or "default" not in checked:
            raise ValueError("softener.default must be a number")
        return checked


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def resolve(user_options: Optional[Dict[str, Any]] = None) -> WrappingConfig:
    """
    Merge user options over the defaults.

    Args:
        user_options: Nested option table; partial tables keep sibling defaults.

    Returns:
        Immutable WrappingConfig

    Raises:
        ConfigError: If an option is unknown or has the wrong type.
    """
    merged = _deep_merge(copy.deepcopy(OPTION_DEFAULTS), user_options or {})

    try:
        return WrappingConfig(**merged)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid wrapping options: {problems}") from e


def validate(config: WrappingConfig) -> WrappingConfig:
    """
    Check cross-option constraints.

    Raises:
        MutuallyExclusiveListsError: If both the filetype allowlist and
            denylist have entries.
    """
    if config.auto_set_mode_filetype_allowlist and config.auto_set_mode_filetype_denylist:
        raise MutuallyExclusiveListsError(
            config.auto_set_mode_filetype_allowlist,
            config.auto_set_mode_filetype_denylist,
        )
    return config


def softener_for(config: WrappingConfig, filetype: str) -> Softener:
    """
    Look up the softener for a filetype, falling back to softener.default.
    """
    value = config.softener.get(filetype)
    if value is None:
        value = config.softener["default"]

    if isinstance(value, bool):
        return SoftenerOverride(value=value)
    return SoftenerFactor(value=value)


def load_options_file(path: Path) -> Dict[str, Any]:
    """
    Read user options from a JSON file.

    Raises:
        ConfigError: If the file is missing or is not a JSON object.
    """
    try:
        with open(path, 'r') as f:
            options = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Options file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Options file {path} is not valid JSON: {e}") from e

    if not isinstance(options, dict):
        raise ConfigError(f"Options file {path} must contain a JSON object")

    logger.debug(f"Loaded wrapping options from {path}")
    return options

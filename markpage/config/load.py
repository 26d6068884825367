"""
Loading of the lexer configuration from YAML.
"""

from __future__ import annotations

from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigError
from ..markdown.model import LexerCfg

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file that must hold a mapping; a missing file yields {}."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Path | str) -> LexerCfg:
    """
    Loads the lexer configuration.

    Args:
        path: YAML file with LexerCfg keys at the top level

    Returns:
        Parsed configuration, defaults when the file does not exist
    """
    path = Path(path)
    raw = _read_yaml_map(path)
    try:
        return LexerCfg.from_dict(raw)
    except ValueError as e:
        raise ConfigError(f"{path}: {e}") from e


__all__ = ["load_config"]

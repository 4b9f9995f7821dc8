"""
Configuration for the markup renderer.
"""

import logging
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import tomli

from .types import RendererOptionsConfig

logger = logging.getLogger(__name__)

DEFAULT_SAFETY_LIMIT = 1000

# config key -> RendererOptions attribute
_CONFIG_KEYS: Dict[str, str] = {
    "tokenizer-safety-limit": "tokenizerSafetyLimit",
    "resolver-safety-limit": "resolverSafetyLimit",
    "multiline": "multiline",
    "ignore-case": "ignoreCase",
    "merge-adjacent-text": "mergeAdjacentText",
}


@dataclass(frozen=True)
class RendererOptions:
    """
    Options of a renderer instance.

    Attributes:
        tokenizerSafetyLimit: Maximum number of delimiter matches processed per text
        resolverSafetyLimit: Maximum number of folding iterations per text
        multiline: Compile the combined regex with ``re.MULTILINE``
        ignoreCase: Compile the combined regex with ``re.IGNORECASE``
        mergeAdjacentText: Concatenate neighbouring literal strings in the
            output and in the children passed to render callbacks
    """

    tokenizerSafetyLimit: int = DEFAULT_SAFETY_LIMIT
    resolverSafetyLimit: int = DEFAULT_SAFETY_LIMIT
    multiline: bool = True
    ignoreCase: bool = False
    mergeAdjacentText: bool = True

    def __post_init__(self):
        """Validate configuration values"""
        if not isinstance(self.tokenizerSafetyLimit, int) or self.tokenizerSafetyLimit <= 0:
            raise ValueError("tokenizerSafetyLimit must be positive")
        if not isinstance(self.resolverSafetyLimit, int) or self.resolverSafetyLimit <= 0:
            raise ValueError("resolverSafetyLimit must be positive")

    @property
    def regexFlags(self) -> int:
        """``re`` flags for the combined regex."""
        flags = 0
        if self.multiline:
            flags |= re.MULTILINE
        if self.ignoreCase:
            flags |= re.IGNORECASE
        return flags

    @classmethod
    def fromDict(cls, config: RendererOptionsConfig | Mapping[str, Any]) -> "RendererOptions":
        """
        Build options from a config dictionary with kebab-case keys.

        Args:
            config: Dictionary like ``{"tokenizer-safety-limit": 5000}``

        Returns:
            Options with unspecified values left at their defaults

        Raises:
            ValueError: On unknown keys or invalid values
        """
        unknownKeys = [key for key in config if key not in _CONFIG_KEYS]
        if unknownKeys:
            raise ValueError(f"Unknown renderer options: {', '.join(sorted(unknownKeys))}")

        return cls(**{_CONFIG_KEYS[key]: value for key, value in config.items()})

    def toDict(self) -> Dict[str, Any]:
        """Inverse of ``fromDict``."""
        attributeToKey = {attribute: key for key, attribute in _CONFIG_KEYS.items()}
        return {attributeToKey[field.name]: getattr(self, field.name) for field in fields(self)}


def loadRendererOptions(path: str | Path, section: str = "markup-renderer") -> RendererOptions:
    """
    Load renderer options from a TOML file.

    Example config::

        [markup-renderer]
        tokenizer-safety-limit = 5000
        merge-adjacent-text = false

    Args:
        path: TOML file to read
        section: Name of the table holding the options

    Returns:
        Options from the table, defaults if the table is absent

    Raises:
        FileNotFoundError: If the file does not exist
        tomli.TOMLDecodeError: If the file is not valid TOML
        ValueError: On unknown keys or invalid values
    """
    with open(path, "rb") as f:
        config = tomli.load(f)

    sectionConfig = config.get(section)
    if sectionConfig is None:
        logger.debug(f"No [{section}] table in {path}, using default renderer options")
        return RendererOptions()
    if not isinstance(sectionConfig, dict):
        raise ValueError(f"[{section}] in {path} must be a table")

    options = RendererOptions.fromDict(sectionConfig)
    logger.info(f"Loaded renderer options from {path}: {options}")
    return options

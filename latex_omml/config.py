"""
Configuration for the LaTeX to OMML converter
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml


logger = logging.getLogger(__name__)

JUSTIFICATIONS = ('left', 'right', 'center', 'centerGroup')


@dataclass
class ConverterConfig:
    """Conversion options."""
    # Validation
    strict: bool = False
    validate: bool = True

    # Display paragraphs
    display_justification: str = "center"  # left, right, center, centerGroup

    # Layout
    nary_limits_stacked: bool = True
    preserve_text_spacing: bool = True

    def __post_init__(self):
        """Check option values."""
        if self.display_justification not in JUSTIFICATIONS:
            raise ValueError(
                f"Invalid display_justification: {self.display_justification!r} "
                f"(expected one of {', '.join(JUSTIFICATIONS)})"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConverterConfig':
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_config(path: Union[str, Path]) -> ConverterConfig:
    """Load converter options from a YAML or JSON file.

    Args:
        path: ``.yaml``/``.yml`` files are read as YAML, anything else as JSON

    Returns:
        ConverterConfig built from the file; an empty file gives the defaults
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")

    config = ConverterConfig.from_dict(data)
    logger.info(f"Loaded converter configuration from {path}")
    return config


__all__ = ['ConverterConfig', 'load_config', 'JUSTIFICATIONS']

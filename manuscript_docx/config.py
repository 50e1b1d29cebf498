"""
Export configuration.

Export settings (page size, margins, scale) and loaders for style sheets and
JSON inputs. Style sheets may be YAML or JSON; the file extension decides.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .exceptions import ConfigurationError
from .models.package import LETTER, PAGE_SIZES, Margins, PageSize
from .utils.units import TWIPS_PER_INCH, inches_to_twips

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = "Letter"
DEFAULT_MARGIN_INCHES = 1.0

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


def resolve_page_size(name: Optional[str]) -> PageSize:
    """Page size by name (case-insensitive); unknown names fall back to Letter."""
    if not name:
        return LETTER
    for key, size in PAGE_SIZES.items():
        if key.lower() == str(name).strip().lower():
            return size
    logger.warning(f"Unknown page size '{name}', using {DEFAULT_PAGE_SIZE}")
    return LETTER


def _margin_twips(value: Any) -> int:
    twips = inches_to_twips(value, default=TWIPS_PER_INCH)
    if twips is None or twips < 0:
        return TWIPS_PER_INCH
    return twips


@dataclass
class ExportSettings:
    """
    Page setup and scale for one export.

    Margins are in inches (numbers or numeric strings, as entered in an
    export dialog).
    """

    page_size: str = DEFAULT_PAGE_SIZE
    margins: Dict[str, Any] = field(default_factory=lambda: {
        "top": DEFAULT_MARGIN_INCHES,
        "bottom": DEFAULT_MARGIN_INCHES,
        "left": DEFAULT_MARGIN_INCHES,
        "right": DEFAULT_MARGIN_INCHES,
    })
    scale: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ExportSettings":
        """Build settings from a mapping using ``pageSize``/``page_size``, ``margins`` and ``scale``."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError("Export settings must be a mapping", type(data).__name__)

        settings = cls()
        page_size = data.get("page_size", data.get("pageSize"))
        if page_size:
            settings.page_size = str(page_size)
        margins = data.get("margins")
        if margins is not None:
            if not isinstance(margins, Mapping):
                raise ConfigurationError("Export settings margins must be a mapping", repr(margins))
            settings.margins.update({k: v for k, v in margins.items() if k in settings.margins})
        scale = data.get("scale")
        if scale is not None:
            settings.scale = scale
        return settings

    @property
    def page_geometry(self) -> PageSize:
        return resolve_page_size(self.page_size)

    @property
    def margin_twips(self) -> Margins:
        return Margins(
            top=_margin_twips(self.margins.get("top")),
            bottom=_margin_twips(self.margins.get("bottom")),
            left=_margin_twips(self.margins.get("left")),
            right=_margin_twips(self.margins.get("right")),
        )


def parse_margins(value: str) -> Dict[str, str]:
    """
    Parse ``"T,B,L,R"`` (inches) into a margins mapping.

    A single value applies to every side.
    """
    parts = [part.strip() for part in str(value).split(",")]
    if len(parts) == 1:
        parts = parts * 4
    if len(parts) != 4 or not all(parts):
        raise ConfigurationError("Margins must be one value or four comma-separated values", value)
    return dict(zip(("top", "bottom", "left", "right"), parts))


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}", str(e)) from e


def load_json(path: Union[str, Path]) -> Any:
    """Load a JSON file."""
    path = Path(path)
    text = _read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}", str(e)) from e


def load_style_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a style sheet from YAML or JSON.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or is not a mapping
    """
    path = Path(path)
    text = _read_text(path)
    suffix = path.suffix.lower()

    try:
        if suffix in JSON_SUFFIXES:
            data = json.loads(text)
        else:
            if suffix not in YAML_SUFFIXES:
                logger.debug(f"Unknown style sheet extension '{suffix}', reading as YAML")
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid style sheet {path}", str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Style sheet {path} must contain a mapping", type(data).__name__)

    logger.debug(f"Loaded style sheet {path} with {len(data)} entries")
    return data

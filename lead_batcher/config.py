"""Configuration helpers for lead batching runs."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .aggregator import DEFAULT_BATCH_SIZE, clamp_batch_size

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}
SHEET_FORMATS = ("xlsx", "csv")


@dataclass(slots=True)
class Settings:
    """Options controlling a single batching run."""

    batch_size: int = DEFAULT_BATCH_SIZE
    output_dir: Path = Path("outputs")
    sheet_format: str = "xlsx"
    sheet_name: Union[str, int] = 0


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid JSON: {exc}") from exc
    else:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - dependency optional
            raise ConfigurationError(
                "YAML configuration requires the 'pyyaml' package to be installed"
            ) from exc
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


def coerce_batch_size(value: Any) -> int:
    """Turn a caller supplied batch size into a usable, clamped integer.

    Missing or non-numeric values fall back to the default of 1000.
    """

    if value is None or isinstance(value, bool):
        return DEFAULT_BATCH_SIZE
    try:
        number = int(float(value)) if isinstance(value, (str, float)) else int(value)
    except (TypeError, ValueError, OverflowError):
        LOGGER.debug("Ignoring non-numeric batch size %r", value)
        return DEFAULT_BATCH_SIZE
    return clamp_batch_size(number)


def settings_from_mapping(config: Mapping[str, Any], **overrides: Any) -> Settings:
    """Build :class:`Settings` from configuration data and explicit overrides."""

    merged: Dict[str, Any] = dict(config)
    merged.update({key: value for key, value in overrides.items() if value is not None})

    unknown = sorted(set(merged) - {"batch_size", "output_dir", "sheet_format", "sheet_name"})
    if unknown:
        LOGGER.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

    sheet_format = str(merged.get("sheet_format", "xlsx")).lower()
    if sheet_format not in SHEET_FORMATS:
        raise ConfigurationError(f"Unsupported sheet format '{sheet_format}'. Use one of {list(SHEET_FORMATS)}")

    return Settings(
        batch_size=coerce_batch_size(merged.get("batch_size")),
        output_dir=Path(merged.get("output_dir") or "outputs"),
        sheet_format=sheet_format,
        sheet_name=merged.get("sheet_name", 0),
    )


def load_settings(path: Optional[str | Path] = None, **overrides: Any) -> Settings:
    config = load_configuration(path) if path else {}
    return settings_from_mapping(config, **overrides)

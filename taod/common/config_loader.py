"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from taod.common.fs import read_yaml
from taod.common.schema import validate_ingest_config

INGEST_CONFIG_FILENAME = "ingest.yml"


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    return _deep_merge(base, overlay)


def load_ingest_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> dict:
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / INGEST_CONFIG_FILENAME
    cfg = _load_yaml_with_overlay(config_dir / INGEST_CONFIG_FILENAME, overlay_path)
    return validate_ingest_config(cfg, allow_unknown=allow_unknown)


def resolve_city_codes_path(cfg: dict, config_dir: Path, override: str | None = None) -> Path:
    """Relative table paths are resolved against the config directory."""
    raw = override or cfg["reference"]["city_codes_path"]
    path = Path(raw)
    if override is None and not path.is_absolute():
        path = config_dir / path
    return path

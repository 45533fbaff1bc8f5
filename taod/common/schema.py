"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from taod.common.errors import ConfigError

SECTION_KEYS = {
    "input": {"encoding", "delimiter", "trim"},
    "reference": {"city_codes_path"},
    "correlation": {"on_duplicate"},
    "errors": {"mode", "max_errors"},
    "output": {"accidents_filename", "involved_parties_filename", "source_epsg", "target_epsg"},
}
ENUM_VALUES = {
    ("correlation", "on_duplicate"): ("overwrite", "reject"),
    ("errors", "mode"): ("fail_fast", "collect"),
}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_mapping(obj: object, ctx: str) -> dict:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    return obj


def validate_ingest_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "ingest config")
    _assert_required_keys(cfg, set(SECTION_KEYS), "ingest config")
    _assert_no_unknown_keys(cfg, set(SECTION_KEYS), "ingest config", allow_unknown)

    for section, keys in SECTION_KEYS.items():
        body = _assert_mapping(cfg[section], section)
        _assert_required_keys(body, keys, section)
        _assert_no_unknown_keys(body, keys, section, allow_unknown)

    for (section, key), allowed in ENUM_VALUES.items():
        value = cfg[section][key]
        if value not in allowed:
            raise ConfigError(f"{section}.{key} must be one of {', '.join(allowed)}; got {value!r}")

    if not isinstance(cfg["errors"]["max_errors"], int) or cfg["errors"]["max_errors"] < 1:
        raise ConfigError("errors.max_errors must be a positive integer")
    for key in ("source_epsg", "target_epsg"):
        if not isinstance(cfg["output"][key], int):
            raise ConfigError(f"output.{key} must be an integer EPSG code")
    if len(str(cfg["input"]["delimiter"])) != 1:
        raise ConfigError("input.delimiter must be a single character")

    return cfg

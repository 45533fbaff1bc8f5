"""City code table loading."""

from __future__ import annotations

import csv
from pathlib import Path

from taod.common.errors import ConfigError

CITY_CODE_HEADERS = ("code", "jis_code")


def load_city_codes(path: Path) -> dict[str, str]:
    """Read ``code,jis_code`` pairs mapping prefecture+municipality codes to JIS codes."""
    if not path.exists():
        raise ConfigError(f"Missing city code table: {path}")
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        missing = set(CITY_CODE_HEADERS) - set(reader.fieldnames or [])
        if missing:
            raise ConfigError(f"Missing columns in {path}: {', '.join(sorted(missing))}")

        cities: dict[str, str] = {}
        for row in reader:
            code = (row["code"] or "").strip()
            jis_code = (row["jis_code"] or "").strip()
            if not code or not jis_code:
                raise ConfigError(f"Blank city code at line {reader.line_num} of {path}")
            if cities.get(code, jis_code) != jis_code:
                raise ConfigError(f"Conflicting JIS codes for city code {code} in {path}")
            cities[code] = jis_code
    return cities

"""Filesystem helpers."""

from __future__ import annotations

import csv
import json
import shutil
from pathlib import Path
from typing import Iterable, Mapping

import yaml

from taod.common.errors import ConfigError


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_yaml(path: Path) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            payload = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return payload


def write_json(path: Path, payload) -> None:
    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2, sort_keys=True)
        f.write("\n")


def write_csv(
    path: Path,
    headers: list[str],
    rows: Iterable[Mapping[str, object]],
    *,
    encoding: str = "utf-8",
) -> None:
    ensure_dir(path.parent)
    with path.open("w", encoding=encoding, newline="") as f:
        writer = csv.DictWriter(f, fieldnames=headers, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


def publish_dir(staging: Path, target: Path) -> None:
    """Move every file of ``staging`` into ``target``, then drop ``staging``.

    Both directories must be on the same filesystem so each move is a rename.
    """
    ensure_dir(target)
    for item in sorted(staging.iterdir()):
        item.replace(target / item.name)
    shutil.rmtree(staging)

"""Hand decoded batches to storage.

:class:`RecordSink` is the boundary to the storage side: ``commit`` must persist
both collections of a batch or neither. :class:`CsvDirectorySink` is the
file-backed implementation used by the CLI.
"""

from __future__ import annotations

import shutil
import tempfile
from dataclasses import fields
from datetime import datetime, time
from pathlib import Path
from typing import Any, Protocol
from uuid import UUID

from taod.common.constants import SOURCE_EPSG
from taod.common.errors import SinkError
from taod.common.fs import ensure_dir, publish_dir, write_csv
from taod.common.models import AccidentRecord, ImportBatch, InvolvedPartyRecord
from taod.pipeline.coordinates import point_ewkt, reproject

ACCIDENT_HEADERS = [f.name for f in fields(AccidentRecord) if f.name != "location"] + [
    "longitude",
    "latitude",
    "location_ewkt",
]
INVOLVED_PARTY_HEADERS = [f.name for f in fields(InvolvedPartyRecord)]


class RecordSink(Protocol):
    def commit(self, batch: ImportBatch) -> None: ...


def _serialize_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime, time)):
        return value.isoformat()
    return value


class CsvDirectorySink:
    def __init__(
        self,
        out_dir: Path,
        *,
        accidents_filename: str = "accidents.csv",
        involved_parties_filename: str = "involved_parties.csv",
        source_epsg: int = SOURCE_EPSG,
        target_epsg: int = SOURCE_EPSG,
    ) -> None:
        self.out_dir = Path(out_dir)
        self.accidents_filename = accidents_filename
        self.involved_parties_filename = involved_parties_filename
        self.source_epsg = source_epsg
        self.target_epsg = target_epsg

    @classmethod
    def from_config(cls, out_dir: Path, cfg: dict) -> "CsvDirectorySink":
        output = cfg["output"]
        return cls(
            out_dir,
            accidents_filename=output["accidents_filename"],
            involved_parties_filename=output["involved_parties_filename"],
            source_epsg=output["source_epsg"],
            target_epsg=output["target_epsg"],
        )

    def _accident_row(self, accident: AccidentRecord) -> dict:
        x, y = reproject(accident.location, self.source_epsg, self.target_epsg)
        row = {
            f.name: _serialize_value(getattr(accident, f.name))
            for f in fields(AccidentRecord)
            if f.name != "location"
        }
        row["longitude"] = x
        row["latitude"] = y
        row["location_ewkt"] = point_ewkt(x, y, self.target_epsg)
        return row

    @staticmethod
    def _involved_party_row(party: InvolvedPartyRecord) -> dict:
        return {f.name: _serialize_value(getattr(party, f.name)) for f in fields(InvolvedPartyRecord)}

    def commit(self, batch: ImportBatch) -> None:
        # Stage beside the target so publishing is a rename on one filesystem.
        ensure_dir(self.out_dir.parent)
        staging = Path(tempfile.mkdtemp(prefix=f".{self.out_dir.name}-staging-", dir=self.out_dir.parent))
        try:
            accident_rows = [self._accident_row(accident) for accident in batch.accidents]
            party_rows = [self._involved_party_row(party) for party in batch.involved_parties]
            write_csv(staging / self.accidents_filename, ACCIDENT_HEADERS, accident_rows)
            write_csv(staging / self.involved_parties_filename, INVOLVED_PARTY_HEADERS, party_rows)
            publish_dir(staging, self.out_dir)
        except OSError as exc:
            raise SinkError(f"Cannot write import batch to {self.out_dir}: {exc}") from exc
        finally:
            # publish_dir already removed staging on success.
            shutil.rmtree(staging, ignore_errors=True)

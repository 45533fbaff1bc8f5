"""Import run report."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from taod.common.errors import DecodeError, IngestError, RowErrors
from taod.common.fs import write_json
from taod.common.models import ImportBatch


def _batch_counts(batch: ImportBatch) -> dict:
    parties_per_accident = Counter(party.accident_id for party in batch.involved_parties)
    by_prefecture = Counter(accident.prefecture_code for accident in batch.accidents)
    return {
        "accidents": len(batch.accidents),
        "involved_parties": len(batch.involved_parties),
        "deaths": sum(accident.number_of_deaths for accident in batch.accidents),
        "injuries": sum(accident.number_of_injuries for accident in batch.accidents),
        "accidents_with_involved_parties": len(parties_per_accident),
        "max_involved_parties_per_accident": max(parties_per_accident.values(), default=0),
        "accidents_by_prefecture": dict(sorted(by_prefecture.items())),
    }


def _error_payload(error: IngestError) -> dict:
    payload = {"error_code": error.error_code, "message": str(error)}
    if isinstance(error, DecodeError):
        payload["row"] = error.row
        payload["column"] = error.column
    if isinstance(error, RowErrors):
        payload["row_errors"] = [
            {"error_code": item.error_code, "row": item.row, "column": item.column, "message": str(item)}
            for item in error.errors
        ]
    return payload


def write_import_summary(
    data_dir: Path,
    *,
    run_id: str,
    main_path: Path,
    support_path: Path,
    batch: ImportBatch | None = None,
    error: IngestError | None = None,
) -> Path:
    payload = {
        "run_id": run_id,
        "status": "error" if error is not None else "success",
        "inputs": {"main": str(main_path), "supplementary": str(support_path)},
        "counts": _batch_counts(batch) if batch is not None and error is None else None,
        "error": _error_payload(error) if error is not None else None,
    }
    summary_path = data_dir / "out" / "reports" / f"{run_id}_import_summary.json"
    write_json(summary_path, payload)
    return summary_path

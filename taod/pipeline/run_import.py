"""Two-pass import: main file, correlation index, supplementary file, commit."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Mapping, TypeVar

from taod.common.errors import DecodeError, IngestError
from taod.common.logging import log_event
from taod.common.models import ImportBatch
from taod.common.time_utils import elapsed_ms
from taod.ingest.files import ReadOptions, read_accidents, read_involved_parties
from taod.pipeline.correlate import AccidentIndex
from taod.pipeline.export import RecordSink

T = TypeVar("T")

_default_logger = logging.getLogger("taod")


def _run_stage(
    logger: logging.Logger,
    run_id: str | None,
    stage: str,
    source: str | None,
    action: Callable[[], T],
    *,
    rows_in: int | None = None,
) -> T:
    started = time.perf_counter()
    log_event(logger, "stage start", run_id=run_id, stage=stage, source=source, event="STAGE_START", status="ok")
    try:
        result = action()
    except IngestError as exc:
        log_event(
            logger,
            str(exc),
            run_id=run_id,
            stage=stage,
            source=source,
            event="STAGE_FAIL",
            status="error",
            duration_ms=elapsed_ms(started),
            error_code=exc.error_code,
            row=exc.row if isinstance(exc, DecodeError) else None,
            column=exc.column if isinstance(exc, DecodeError) else None,
        )
        raise
    log_event(
        logger,
        "stage end",
        run_id=run_id,
        stage=stage,
        source=source,
        event="STAGE_END",
        status="ok",
        duration_ms=elapsed_ms(started),
        rows_in=rows_in,
        rows_out=len(result) if hasattr(result, "__len__") else None,
    )
    return result


def run_import(
    main_path: Path,
    support_path: Path,
    cities: Mapping[str, str],
    *,
    options: ReadOptions = ReadOptions(),
    on_duplicate: str = "overwrite",
    logger: logging.Logger | None = None,
    run_id: str | None = None,
) -> ImportBatch:
    """Decode both files of one dataset release into an :class:`ImportBatch`.

    The supplementary file is only read once every accident of the main file
    has been decoded and indexed. Any failure propagates and no batch is
    returned.
    """
    logger = logger or _default_logger

    accidents = _run_stage(
        logger,
        run_id,
        "read-main",
        str(main_path),
        lambda: read_accidents(main_path, cities, options=options),
    )
    index = _run_stage(
        logger,
        run_id,
        "correlate",
        None,
        lambda: AccidentIndex.build(accidents, on_duplicate=on_duplicate),
        rows_in=len(accidents),
    )
    involved_parties = _run_stage(
        logger,
        run_id,
        "read-supplementary",
        str(support_path),
        lambda: read_involved_parties(support_path, index, options=options),
    )
    del index
    return ImportBatch(accidents=accidents, involved_parties=involved_parties)


def import_and_commit(
    main_path: Path,
    support_path: Path,
    cities: Mapping[str, str],
    sink: RecordSink,
    *,
    options: ReadOptions = ReadOptions(),
    on_duplicate: str = "overwrite",
    logger: logging.Logger | None = None,
    run_id: str | None = None,
) -> ImportBatch:
    logger = logger or _default_logger
    batch = run_import(
        main_path,
        support_path,
        cities,
        options=options,
        on_duplicate=on_duplicate,
        logger=logger,
        run_id=run_id,
    )
    _run_stage(
        logger,
        run_id,
        "commit",
        None,
        lambda: sink.commit(batch),
        rows_in=len(batch.accidents) + len(batch.involved_parties),
    )
    return batch

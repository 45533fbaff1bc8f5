"""CLI entrypoint for the traffic accident open data importer."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from taod.common.config_loader import load_ingest_config, resolve_city_codes_path
from taod.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS
from taod.common.errors import IngestError
from taod.common.ids import generate_run_id
from taod.common.logging import build_logger, log_event
from taod.ingest.files import ReadOptions
from taod.ingest.reference import load_city_codes
from taod.pipeline.export import CsvDirectorySink
from taod.pipeline.reports import write_import_summary
from taod.pipeline.run_import import import_and_commit


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="decode a main/supplementary file pair and store it")
    import_parser.add_argument("main_file", help="main file (honhyo), CP932 encoded")
    import_parser.add_argument("support_file", help="supplementary file (hojuhyo), CP932 encoded")
    import_parser.add_argument("--config-dir", default="./config")
    import_parser.add_argument("--overlay-config-dir", default=None)
    import_parser.add_argument("--data-dir", default="./data")
    import_parser.add_argument("--city-codes", default=None)
    import_parser.add_argument("--run-id", default=None)
    import_parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    config_dir = Path(args.config_dir)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    data_dir = Path(args.data_dir)
    main_path = Path(args.main_file)
    support_path = Path(args.support_file)

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    try:
        cfg = load_ingest_config(config_dir, overlay_config_dir=overlay_config_dir)
        cities = load_city_codes(resolve_city_codes_path(cfg, config_dir, args.city_codes))
        batch = import_and_commit(
            main_path,
            support_path,
            cities,
            CsvDirectorySink.from_config(data_dir / "out", cfg),
            options=ReadOptions.from_config(cfg),
            on_duplicate=cfg["correlation"]["on_duplicate"],
            logger=logger,
            run_id=run_id,
        )
    except IngestError as exc:
        log_event(logger, str(exc), run_id=run_id, event="RUN_FAIL", status="error", error_code=exc.error_code)
        write_import_summary(data_dir, run_id=run_id, main_path=main_path, support_path=support_path, error=exc)
        return EXIT_HARD_FAIL
    except Exception:
        logger.exception(
            "unexpected failure",
            extra={"run_id": run_id, "event": "RUN_FAIL", "status": "error", "error_code": "UNEXPECTED_ERROR"},
        )
        return EXIT_HARD_FAIL

    write_import_summary(data_dir, run_id=run_id, main_path=main_path, support_path=support_path, batch=batch)
    log_event(
        logger,
        "import committed",
        run_id=run_id,
        event="RUN_END",
        status="ok",
        rows_out=len(batch.accidents) + len(batch.involved_parties),
    )
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())

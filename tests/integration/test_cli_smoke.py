import json
from pathlib import Path

import pytest

from conftest import SUPPLEMENTARY_HEADER, supplementary_row, write_cp932
from taod.cli import parse_args, run_command
from taod.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS


def _args(main_path: Path, support_path: Path, data_dir: Path, run_id: str):
    return parse_args(
        [
            "import",
            str(main_path),
            str(support_path),
            "--config-dir",
            "config",
            "--data-dir",
            str(data_dir),
            "--run-id",
            run_id,
        ]
    )


@pytest.mark.integration
def test_cli_import_generates_expected_artifacts(tmp_path: Path, dataset):
    main_path, support_path = dataset
    data_dir = tmp_path / "data"

    exit_code = run_command(_args(main_path, support_path, data_dir, "run-test"))

    assert exit_code == EXIT_SUCCESS
    assert (data_dir / "out" / "accidents.csv").exists()
    assert (data_dir / "out" / "involved_parties.csv").exists()
    assert (data_dir / "run_meta" / "run-test.log.jsonl").exists()
    summary = json.loads((data_dir / "out" / "reports" / "run-test_import_summary.json").read_text(encoding="utf-8"))
    assert summary["status"] == "success"
    assert summary["counts"]["involved_parties"] == 3


@pytest.mark.integration
def test_cli_import_failure_writes_nothing_but_the_report(tmp_path: Path, dataset):
    main_path, _ = dataset
    support_path = write_cp932(
        tmp_path / "bad_hojuhyo.csv",
        SUPPLEMENTARY_HEADER,
        [supplementary_row(c3="0099")],
    )
    data_dir = tmp_path / "data"

    exit_code = run_command(_args(main_path, support_path, data_dir, "run-bad"))

    assert exit_code == EXIT_HARD_FAIL
    assert not (data_dir / "out" / "accidents.csv").exists()
    summary = json.loads((data_dir / "out" / "reports" / "run-bad_import_summary.json").read_text(encoding="utf-8"))
    assert summary["status"] == "error"
    assert summary["error"]["error_code"] == "UNRESOLVED_REFERENCE"
    assert summary["error"]["row"] == 1

    events = [
        json.loads(line)
        for line in (data_dir / "run_meta" / "run-bad.log.jsonl").read_text(encoding="utf-8").splitlines()
    ]
    failed = [event for event in events if event["event"] == "STAGE_FAIL"]
    assert failed[0]["stage"] == "read-supplementary"


@pytest.mark.integration
def test_cli_import_missing_input_writes_error_report(tmp_path: Path):
    missing = tmp_path / "missing.csv"
    data_dir = tmp_path / "data"

    exit_code = run_command(_args(missing, missing, data_dir, "run-missing"))

    assert exit_code == EXIT_HARD_FAIL
    summary = json.loads(
        (data_dir / "out" / "reports" / "run-missing_import_summary.json").read_text(encoding="utf-8")
    )
    assert summary["status"] == "error"
    assert summary["error"]["error_code"] == "INPUT_FILE_ERROR"

    events = [
        json.loads(line)
        for line in (data_dir / "run_meta" / "run-missing.log.jsonl").read_text(encoding="utf-8").splitlines()
    ]
    failed = [event for event in events if event["event"] == "STAGE_FAIL"]
    assert failed[0]["stage"] == "read-main"
    assert failed[0]["error_code"] == "INPUT_FILE_ERROR"

from pathlib import Path

import pytest

MAIN_ROW = (
    "1,10,059,0001,2,000,001,40010,0000,104,2022,01,22,14,18,12,06,59,16,33,5,1,3,14,7,00,00,00,00,04,9,01,70,"
    "1,4,21,35,25,03,04,31,31,01,01,1,1,00,00,04,04,30,30,3,3,2,2,2,2,2,4,430234789,1412612831,7,3,9999,9999,1,1"
)
MAIN_HEADER = ",".join(["資料区分", "都道府県コード", "警察署等コード", "本票番号"] + [f"項目{n}" for n in range(4, 68)])

SUPPLEMENTARY_ROW = "2,10,059,0001,001,03,31,01,1,1,00,2,2,4,30,3"
SUPPLEMENTARY_HEADER = ",".join(
    ["資料区分", "都道府県コード", "警察署等コード", "本票番号", "補充票番号"] + [f"項目{n}" for n in range(5, 16)]
)


def main_row(**overrides: str) -> list[str]:
    """The reference main row, with cells replaced by ``c<index>=value``."""
    cells = MAIN_ROW.split(",")
    for key, value in overrides.items():
        cells[int(key[1:])] = value
    return cells


def supplementary_row(**overrides: str) -> list[str]:
    cells = SUPPLEMENTARY_ROW.split(",")
    for key, value in overrides.items():
        cells[int(key[1:])] = value
    return cells


def write_cp932(path: Path, header: str, rows: list[list[str]]) -> Path:
    lines = [header] + [",".join(row) for row in rows]
    path.write_bytes(("\r\n".join(lines) + "\r\n").encode("cp932"))
    return path


@pytest.fixture
def cities() -> dict[str, str]:
    return {"10104": "01104", "10105": "01105"}


@pytest.fixture
def dataset(tmp_path: Path) -> tuple[Path, Path]:
    """A main file with two accidents and a supplementary file with three parties."""
    main_path = write_cp932(
        tmp_path / "honhyo.csv",
        MAIN_HEADER,
        [
            main_row(),
            main_row(c3="0002", c9="105", c5="001", c6="000"),
        ],
    )
    support_path = write_cp932(
        tmp_path / "hojuhyo.csv",
        SUPPLEMENTARY_HEADER,
        [
            supplementary_row(),
            supplementary_row(c4="002", c5="61", c6="", c7="", c14="", c15=""),
            supplementary_row(c3="0002"),
        ],
    )
    return main_path, support_path

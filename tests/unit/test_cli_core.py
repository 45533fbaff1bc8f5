import pytest

from taod.cli import parse_args


def test_parse_args_defaults():
    args = parse_args(["import", "honhyo.csv", "hojuhyo.csv"])
    assert args.command == "import"
    assert args.main_file == "honhyo.csv"
    assert args.support_file == "hojuhyo.csv"
    assert args.config_dir == "./config"
    assert args.overlay_config_dir is None
    assert args.city_codes is None


def test_parse_args_accepts_overlay_config_dir():
    args = parse_args(["import", "a.csv", "b.csv", "--overlay-config-dir", "config/live"])
    assert args.overlay_config_dir == "config/live"


def test_parse_args_requires_both_files():
    with pytest.raises(SystemExit):
        parse_args(["import", "a.csv"])

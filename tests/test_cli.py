import pytest

from sire.cli import build_parser, handle
from sire.engine import StormImpactEngine


@pytest.fixture
def engine(raw_events):
    return StormImpactEngine(events=raw_events)


def test_parser_defaults():
    args = build_parser().parse_args(["--data", "StormData.csv.bz2"])
    assert args.data == "StormData.csv.bz2"
    assert args.top == 5
    assert not args.verbose


def test_health_command(engine, capsys):
    handle(engine, "health 2")
    out = capsys.readouterr().out
    assert "Top 2 of 3 categories by fatalities" in out
    assert "Excessive Heat" in out
    assert "Thunderstorm" not in out


def test_financial_uses_default_n(engine, capsys):
    handle(engine, "financial", default_n=1)
    out = capsys.readouterr().out
    assert "Flood" in out
    assert "Tornado" not in out


def test_classify_command(engine, capsys):
    handle(engine, 'classify "Heavy Wind / High Surf"')
    assert "-> High Surf" in capsys.readouterr().out


def test_stats_command(engine, capsys):
    handle(engine, "stats")
    assert "Unclassifiable: 2" in capsys.readouterr().out


def test_export_command(engine, tmp_path, capsys):
    out = tmp_path / "summary.json"
    handle(engine, f'export json "{out}"')
    assert out.exists()


def test_unknown_command(engine, capsys):
    handle(engine, "frobnicate")
    assert "Unknown command" in capsys.readouterr().out


def test_bad_n_raises(engine):
    with pytest.raises(ValueError):
        handle(engine, "health -1")

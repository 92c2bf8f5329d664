import json

import pandas as pd
import pytest

from sire.engine import StormImpactEngine


@pytest.fixture
def engine(raw_events):
    return StormImpactEngine(events=raw_events)


def test_engine_builds_views(engine):
    assert engine.unclassified == 2
    assert engine.health().labels() == ["Excessive Heat", "Tornado", "Thunderstorm"]
    assert engine.financial().labels() == ["Flood", "Tornado", "Thunderstorm"]
    assert engine.top("health", 1)[0].category == "Excessive Heat"
    assert [s.category for s in engine.top("financial", 2)] == ["Flood", "Tornado"]


def test_engine_unknown_view(engine):
    with pytest.raises(ValueError):
        engine.view("wind")


def test_engine_totals_exclude_unclassifiable(engine):
    t = engine.totals()
    assert t["events"] == 6
    assert t["fatalities"] == 26
    assert t["injuries"] == 163


def test_engine_lookup_and_classify(engine):
    assert engine.summary("Hail").events == 1
    assert engine.summary("Blizzard") is None
    assert engine.classify("tstm wind") == "Thunderstorm"


def test_engine_severity(engine):
    scores = engine.severity()
    assert scores[0][0] == "Excessive Heat"
    assert "Flood" not in dict(scores)


def test_from_path(tmp_path):
    path = tmp_path / "storm.csv"
    pd.DataFrame({
        "EVTYPE": ["TORNADO", "MONTHLY SUMMARY"],
        "FATALITIES": [3, 1],
        "INJURIES": [4, 1],
        "PROPDMG": [1.0, 1.0],
        "PROPDMGEXP": ["M", "M"],
        "CROPDMG": [0, 0],
        "CROPDMGEXP": ["", ""],
    }).to_csv(path, index=False)
    engine = StormImpactEngine.from_path(str(path))
    assert engine.dataset_path == str(path)
    (tornado,) = engine.summaries
    assert tornado.category == "Tornado"
    assert tornado.prop_damage_usd == 1_000_000


def test_exports(engine, tmp_path):
    csv_path = tmp_path / "out.csv"
    json_path = tmp_path / "out.json"
    engine.export_csv(str(csv_path))
    engine.export_json(str(json_path))

    df = pd.read_csv(csv_path)
    assert list(df["category"]) == [s.category for s in engine.summaries]
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload[0]["category"] == "Excessive Heat"
    assert payload[0]["fatalities"] == 20

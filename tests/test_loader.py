import os

import pandas as pd
import pytest

from sire.loader import CachedLoader, frame_to_events, load_storm_events

ROWS = {
    "BGN_DATE": ["4/18/1950 0:00:00", "1/1/1996 0:00:00", "6/3/2011 0:00:00"],
    "STATE": ["AL", "TX", "MO"],
    "EVTYPE": ["TORNADO", " TSTM WIND ", None],
    "FATALITIES": [0, 2, None],
    "INJURIES": [15, 0, 1],
    "PROPDMG": [25.0, 5.0, None],
    "PROPDMGEXP": ["K", None, "M"],
    "CROPDMG": [0.0, 1.5, 0.0],
    "CROPDMGEXP": [None, "M", None],
}


def test_frame_to_events():
    events = frame_to_events(pd.DataFrame(ROWS))
    assert len(events) == 3
    first, second, third = events
    assert first.event_type == "TORNADO"
    assert first.injuries == 15
    assert first.prop_dmg == 25.0 and first.prop_dmg_exp == "K"
    assert first.crop_dmg_exp == ""
    assert first.state == "AL"
    assert second.event_type == "TSTM WIND"
    assert second.prop_dmg_exp == ""
    assert third.event_type == ""
    assert third.fatalities is None
    assert third.prop_dmg is None


def test_column_aliases_and_optional_columns():
    df = pd.DataFrame({
        "event_type": ["Hail"],
        "deaths_direct": [1],
        "injuries_direct": [2],
        "damage_property": [3.0],
        "damage_crops": [4.0],
    })
    (e,) = frame_to_events(df)
    assert (e.event_type, e.fatalities, e.injuries, e.prop_dmg, e.crop_dmg) == ("Hail", 1, 2, 3.0, 4.0)
    assert e.prop_dmg_exp == "" and e.begin_date == ""


def test_missing_required_column():
    with pytest.raises(KeyError):
        frame_to_events(pd.DataFrame({"EVTYPE": ["HAIL"]}))


def test_load_compressed_csv(tmp_path):
    path = tmp_path / "StormData.csv.bz2"
    pd.DataFrame(ROWS).to_csv(path, index=False)
    events = load_storm_events(str(path))
    assert [e.event_type for e in events] == ["TORNADO", "TSTM WIND", ""]


def test_cached_loader_reads_once(tmp_path):
    path = tmp_path / "storm.csv"
    pd.DataFrame(ROWS).to_csv(path, index=False)
    calls = []

    def counting_load(p):
        calls.append(p)
        return load_storm_events(p)

    loader = CachedLoader(load=counting_load)
    a = loader(str(path))
    b = loader(str(path))
    assert a is b
    assert len(calls) == 1

    # A newer file replaces the cached entry
    st = os.stat(path)
    os.utime(path, (st.st_atime, st.st_mtime + 10))
    loader(str(path))
    assert len(calls) == 2
    assert len(loader) == 1

    loader.clear()
    assert len(loader) == 0

import pytest

from sire.models import RawEvent


def make_event(event_id=0, event_type="TORNADO", fatalities=0, injuries=0,
               prop_dmg=None, prop_dmg_exp="", crop_dmg=None, crop_dmg_exp=""):
    return RawEvent(
        event_id=event_id,
        event_type=event_type,
        fatalities=fatalities,
        injuries=injuries,
        prop_dmg=prop_dmg,
        prop_dmg_exp=prop_dmg_exp,
        crop_dmg=crop_dmg,
        crop_dmg_exp=crop_dmg_exp,
    )


@pytest.fixture
def raw_events():
    rows = [
        ("TORNADO", 5, 100, 2.5, "M", 0.0, ""),
        ("TSTM WIND", 1, 10, 50.0, "K", 5.0, "K"),
        ("Thunderstorm Winds/Hail", 0, 3, 10.0, "k", None, ""),
        ("EXCESSIVE HEAT", 20, 50, None, "", None, ""),
        ("FLOOD", 0, 0, 1.0, "B", 3.0, "M"),
        ("MONTHLY SUMMARY", 7, 7, 9.0, "B", 9.0, "B"),
        ("?", 1, 0, None, "", None, ""),
        ("HAIL", 0, 0, 0.0, "", 0.0, ""),
    ]
    return [
        make_event(i, t, f, inj, pd_, pe, cd, ce)
        for i, (t, f, inj, pd_, pe, cd, ce) in enumerate(rows)
    ]

# tests/test_ui_utils.py
from datetime import datetime, timezone

from backend.briefing.taf_parsing import TafEntry, TafEntryKind
from ui.utils import format_metar_markup, format_taf_entry, parse_columns, parse_speed_rows, parse_weights


def test_parse_weights():
    assert parse_weights("2200, 2400 2600,,2740 ") == ["2200", "2400", "2600", "2740"]
    assert parse_weights("") == []


def test_parse_columns():
    assert parse_columns("Flaps 0|Gear Down; Flaps 15 | Takeoff ;Full") == [
        ("Flaps 0", "Gear Down"),
        ("Flaps 15", "Takeoff"),
        ("Full", "Gear Down"),
    ]


def test_parse_speed_rows():
    assert parse_speed_rows("56, 53; 59,55;") == [["56", "53"], ["59", "55"]]


def test_metar_markup_highlights_wind():
    markup = format_metar_markup("KMIE 121654Z 18015G25KT 10SM [x]", "kmie")
    assert "[bold yellow]18015G25KT[/bold yellow]" in markup
    assert "[bold]KMIE[/bold]" in markup
    assert "\\[x]" in markup


def test_taf_entry_line():
    now = datetime(2024, 3, 12, 19, tzinfo=timezone.utc)
    entry = TafEntry(raw="FM121800 20015G22KT", kind=TafEntryKind.FM, day=12, hour=18, gust=22)

    active = format_taf_entry(entry, True, now)
    assert "● Active" in active
    assert "G22" in active

    header = TafEntry(raw="TAF KMIE 121130Z", kind=TafEntryKind.HEADER)
    assert "Active" not in format_taf_entry(header, True, now)

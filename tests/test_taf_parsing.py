# tests/test_taf_parsing.py
from datetime import datetime, timezone

from backend.briefing.taf_parsing import (
    TafEntry,
    TafEntryKind,
    find_active_entry,
    format_taf_local_time,
    format_zulu_time,
    parse_taf,
    resolve_taf_time,
)


SAMPLE_PAGE = (
    "<b>TAF: KMIE</b> 121130Z 1212/1312 18012KT FM121800 20015G22KT "
    "BECMG 1300/1302 22010KT METAR KMIE 121654Z 18015G25KT"
)


def utc(year, month, day, hour=0, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def test_parse_sample_page():
    entries = parse_taf(SAMPLE_PAGE, "KMIE")
    assert [e.kind for e in entries] == [TafEntryKind.HEADER, TafEntryKind.FM, TafEntryKind.BECMG]

    header, fm, becmg = entries
    assert header.raw == "TAF: KMIE 121130Z 1212/1312 18012KT"
    assert header.gust is None

    assert (fm.day, fm.hour, fm.gust) == (12, 18, 22)
    assert (becmg.day, becmg.hour, becmg.gust) == (13, 0, None)

    assert all("METAR" not in e.raw for e in entries)


def test_parse_is_deterministic():
    assert parse_taf(SAMPLE_PAGE, "KMIE") == parse_taf(SAMPLE_PAGE, "KMIE")


def test_parse_without_taf_returns_empty():
    assert parse_taf("<html><p>No forecast available</p></html>", "KMIE") == []
    assert parse_taf("", "KMIE") == []


def test_parse_without_marker_starts_at_first_group():
    page = "<p>Forecast</p> FM121800 20015G22KT BECMG 1300/1302 22010KT"
    entries = parse_taf(page, "KMIE")
    assert [e.kind for e in entries] == [TafEntryKind.FM, TafEntryKind.BECMG]
    assert entries[0].gust == 22


def test_parse_tempo_and_prob_groups():
    page = "TAF KABC 121130Z 1212/1312 18012KT TEMPO 1214/1216 25020G30KT PROB30 1218/1220 TSRA"
    entries = parse_taf(page, "KABC")
    assert [e.kind for e in entries] == [TafEntryKind.HEADER, TafEntryKind.TEMPO, TafEntryKind.BASE]

    tempo = entries[1]
    assert (tempo.day, tempo.hour, tempo.gust) == (12, 14, 30)

    prob = entries[2]
    assert prob.raw == "PROB30 1218/1220 TSRA"
    assert prob.day is None and prob.hour is None


def test_resolve_same_month():
    assert resolve_taf_time(12, 18, utc(2024, 3, 12, 10)) == utc(2024, 3, 12, 18)


def test_resolve_rolls_forward_into_next_month():
    assert resolve_taf_time(1, 6, utc(2024, 3, 30, 12)) == utc(2024, 4, 1, 6)
    assert resolve_taf_time(1, 0, utc(2024, 12, 31, 23)) == utc(2025, 1, 1, 0)


def test_resolve_rolls_back_into_previous_month():
    assert resolve_taf_time(28, 18, utc(2024, 3, 2, 1)) == utc(2024, 2, 28, 18)


def test_resolve_hour_24_is_next_midnight():
    assert resolve_taf_time(12, 24, utc(2024, 3, 12, 10)) == utc(2024, 3, 13, 0)


def test_resolve_day_past_month_end_overflows():
    assert resolve_taf_time(31, 6, utc(2024, 4, 20)) == utc(2024, 5, 1, 6)


def test_resolve_missing_or_invalid_values():
    now = utc(2024, 3, 12)
    assert resolve_taf_time(None, 18, now) is None
    assert resolve_taf_time(12, None, now) is None
    assert resolve_taf_time(0, 18, now) is None
    assert resolve_taf_time(12, 25, now) is None


def test_active_entry_follows_the_clock():
    entries = parse_taf(SAMPLE_PAGE, "KMIE")
    assert find_active_entry(entries, utc(2024, 3, 12, 17)) == 0
    assert find_active_entry(entries, utc(2024, 3, 12, 18)) == 1
    # BECMG groups are never marked active
    assert find_active_entry(entries, utc(2024, 3, 13, 6)) == 1


def test_active_entry_ignores_header_after_first_line():
    entries = [
        TafEntry(raw="FM121800 20015KT", kind=TafEntryKind.FM, day=12, hour=18),
        TafEntry(raw="TAF KMIE AMD", kind=TafEntryKind.HEADER),
    ]
    assert find_active_entry(entries, utc(2024, 3, 12, 17)) is None
    assert find_active_entry(entries, utc(2024, 3, 12, 19)) == 0


def test_active_entry_empty_list():
    assert find_active_entry([], utc(2024, 3, 12)) is None


def test_format_local_time():
    assert format_taf_local_time(None, 18) is None
    label = format_taf_local_time(12, 18, utc(2024, 3, 12))
    assert label is not None
    assert label.endswith(("AM", "PM"))


def test_format_zulu_time():
    assert format_zulu_time(utc(2024, 3, 5, 7, 4)) == "0704Z (Day 5)"


def test_parse_drops_lines_of_five_characters_or_less():
    entries = parse_taf("TAF X FM121800 20015KT", "X")
    assert [e.raw for e in entries] == ["FM121800 20015KT"]

    entries = parse_taf("TAF XY FM121800 20015KT", "XY")
    assert [e.raw for e in entries] == ["TAF XY", "FM121800 20015KT"]
    assert entries[0].kind == TafEntryKind.HEADER


def test_stop_marker_near_block_start_is_ignored():
    # "METAR" starts at offset 8 of the block, before the search offset
    entries = parse_taf("TAF KMI METAR AMD 121130Z 1212/1312 18012KT FM121800 20015G22KT", "KMI")
    assert [e.kind for e in entries] == [TafEntryKind.HEADER, TafEntryKind.FM]
    assert entries[0].raw == "TAF KMI METAR AMD 121130Z 1212/1312 18012KT"
    assert entries[1].gust == 22


def test_parse_stops_at_observation():
    page = "TAF KMIE 121130Z 1212/1312 18012KT FM121800 20015KT OBSERVATION FM131200 25030G40KT"
    entries = parse_taf(page, "KMIE")
    assert [e.raw for e in entries] == ["TAF KMIE 121130Z 1212/1312 18012KT", "FM121800 20015KT"]


def test_parse_stops_at_key_to_decoding():
    page = "TAF KMIE 121130Z 1212/1312 18012KT FM121800 20015KT Key to Decoding FM131200 25030G40KT"
    entries = parse_taf(page, "KMIE")
    assert len(entries) == 2
    assert all(e.gust is None for e in entries)


def test_parse_stops_at_copyright():
    page = "<p>TAF KMIE 121130Z 1212/1312 18012KT</p><p>Copyright 2024 FM131200 25030G40KT</p>"
    entries = parse_taf(page, "KMIE")
    assert [e.raw for e in entries] == ["TAF KMIE 121130Z 1212/1312 18012KT"]


def test_parse_stops_at_earliest_marker():
    page = "TAF KMIE 121130Z 1212/1312 18012KT Copyright FM121800 20015KT METAR FM131200 25030G40KT"
    entries = parse_taf(page, "KMIE")
    assert len(entries) == 1


def test_prob_group_before_fm_group():
    page = "TAF KMIE 121130Z 1212/1312 18012KT PROB30 1214/1216 TSRA FM121800 20015G22KT"
    entries = parse_taf(page, "KMIE")
    assert [e.kind for e in entries] == [TafEntryKind.HEADER, TafEntryKind.BASE, TafEntryKind.FM]
    assert entries[1].raw == "PROB30 1214/1216 TSRA"
    assert (entries[2].day, entries[2].hour, entries[2].gust) == (12, 18, 22)


def test_active_entry_skips_impossible_time():
    entries = parse_taf("TAF: KMIE 121130Z 1212/1312 18012KT FM129900 20015KT", "KMIE")
    assert entries[1].hour == 99
    assert find_active_entry(entries, utc(2024, 3, 12, 13)) == 0

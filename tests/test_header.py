from server_timing import TimeUnit, TimingEntry
from server_timing.timing import format_server_timing, format_timing_entry


def test_entry_without_description_omits_desc():
    entry = TimingEntry("db", 12, TimeUnit.MILLISECOND)
    assert format_timing_entry(entry, TimeUnit.MILLISECOND) == "db;dur=12"


def test_entry_with_description_puts_desc_before_dur():
    entry = TimingEntry("db", 12, TimeUnit.MILLISECOND, "Primary DB")
    assert format_timing_entry(entry, TimeUnit.MILLISECOND) == 'db;desc="Primary DB";dur=12'


def test_empty_description_is_still_rendered():
    entry = TimingEntry("db", 12, TimeUnit.MILLISECOND, "")
    assert format_timing_entry(entry, TimeUnit.MILLISECOND) == 'db;desc="";dur=12'


def test_quotes_in_description_are_escaped():
    entry = TimingEntry("cache", 1, TimeUnit.MILLISECOND, 'say "hi" \\ bye')
    assert (
        format_timing_entry(entry, TimeUnit.MILLISECOND)
        == 'cache;desc="say \\"hi\\" \\\\ bye";dur=1'
    )


def test_duplicate_names_are_kept():
    entries = [
        TimingEntry("db", 1, TimeUnit.MILLISECOND),
        TimingEntry("db", 2, TimeUnit.MILLISECOND),
    ]
    assert format_server_timing(entries, TimeUnit.MILLISECOND) == "db;dur=1, db;dur=2"


def test_no_entries_renders_empty_value():
    assert format_server_timing([], TimeUnit.SECOND) == ""

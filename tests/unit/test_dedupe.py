"""Candidate deduplication: last record wins, first-seen order is kept."""

from datetime import datetime, timezone

from irap.core.models import CandidateReportRow
from irap.core.reporting.dedupe import dedupe


def _row(name, email=None, record_id=None, completed_day=1):
    return CandidateReportRow(
        name=name,
        email=email,
        record_id=record_id,
        completed_at=datetime(2026, 3, completed_day, tzinfo=timezone.utc),
    )


def test_same_email_keeps_later_record():
    early = _row("Ada (first try)", "ada@example.com", "1", completed_day=1)
    late = _row("Ada (retake)", "ada@example.com", "2", completed_day=9)

    result = dedupe([early, late])

    assert result == [late]


def test_email_match_ignores_case_and_spacing():
    result = dedupe([_row("a", "Ada@Example.com"), _row("b", " ada@example.com ")])
    assert [row.name for row in result] == ["b"]


def test_output_keeps_first_seen_group_order():
    rows = [
        _row("ada-1", "ada@example.com"),
        _row("grace", "grace@example.com"),
        _row("ada-2", "ada@example.com"),
        _row("linus", "linus@example.com"),
    ]
    assert [row.name for row in dedupe(rows)] == ["ada-2", "grace", "linus"]


def test_falls_back_to_record_id():
    rows = [_row("x-1", record_id="7"), _row("y", record_id="8"), _row("x-2", record_id="7")]
    assert [row.name for row in dedupe(rows)] == ["x-2", "y"]


def test_rows_without_identity_are_never_merged():
    rows = [_row("anon-1"), _row("anon-2")]
    assert [row.name for row in dedupe(rows)] == ["anon-1", "anon-2"]


def test_no_field_merging_across_duplicates():
    early = CandidateReportRow(name="Ada", email="ada@example.com", recommendations="Hire")
    late = CandidateReportRow(name="Ada", email="ada@example.com")
    assert dedupe([early, late])[0].recommendations is None


def test_empty_input():
    assert dedupe([]) == []

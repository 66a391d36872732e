"""Candidate Deduplicator - one row per candidate for list and export views."""

from collections.abc import Iterable

from ..models.candidate import CandidateReportRow


def identity_key(row: CandidateReportRow, position: int) -> str:
    """Grouping key: email if present, else record id, else the row position.

    Rows with neither email nor id are never merged with each other.
    """
    if row.email:
        return f"email:{row.email.strip().lower()}"
    if row.record_id:
        return f"id:{row.record_id}"
    return f"row:{position}"


def dedupe(rows: Iterable[CandidateReportRow]) -> list[CandidateReportRow]:
    """Collapse rows that refer to the same candidate.

    Input is read oldest to newest: the last row of a group replaces the
    earlier ones wholesale. Groups stay in the position where they were first
    seen.
    """
    latest: dict[str, CandidateReportRow] = {}
    for position, row in enumerate(rows):
        latest[identity_key(row, position)] = row
    return list(latest.values())

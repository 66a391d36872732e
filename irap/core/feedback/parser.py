"""Feedback Parser - turns a raw feedback value of unknown shape into a mapping.

Every JSON-in-a-column value the store hands us (transcripts, feedback,
question lists, interview types) is decoded here and nowhere else. Nothing
in this module raises: undecodable values fall back to an empty default and
the reason is reported on the result and in the log.
"""

import json
from collections.abc import Mapping
from typing import Any

from ..models.assessment import ParsedFeedback
from ..models.candidate import RawCandidateRecord
from ..models.enums import FeedbackIssue
from ..models.interview import InterviewDetail
from ...observability.logger import get_logger

logger = get_logger(__name__)

FEEDBACK_KEY = "feedback"
QUESTION_CONTAINER_KEY = "interviewQuestions"
QUESTION_TEXT_KEYS = ("Interviewquestion", "question")

# Legacy producers stored JSON text that was itself JSON-encoded
_MAX_DECODE_DEPTH = 2


def _decode_text(text: str) -> tuple[Any, FeedbackIssue | None]:
    """Decode JSON text, unwrapping one level of double encoding."""
    value: Any = text
    for _ in range(_MAX_DECODE_DEPTH):
        if not isinstance(value, str):
            break
        if not value.strip():
            return None, None
        try:
            value = json.loads(value)
        # Deeply nested arrays/objects exhaust the decoder's recursion limit
        except (ValueError, RecursionError):
            return None, FeedbackIssue.MALFORMED_JSON
    return value, None


def parse_feedback(raw: Any, *, source: str = FEEDBACK_KEY) -> ParsedFeedback:
    """Parse a raw payload that should hold a JSON object.

    Args:
        raw: None, a mapping, or JSON text
        source: Label used in log events

    Returns:
        ParsedFeedback whose ``data`` is always a dict
    """
    if raw is None:
        return ParsedFeedback()

    if isinstance(raw, Mapping):
        return ParsedFeedback(data=dict(raw))

    if isinstance(raw, (str, bytes, bytearray)):
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, (bytes, bytearray)) else raw
        value, issue = _decode_text(text)
        if issue is not None:
            logger.warning("feedback_malformed_json", source=source, length=len(text))
            return ParsedFeedback(issue=issue)
        if value is None:
            return ParsedFeedback()
        if isinstance(value, Mapping):
            return ParsedFeedback(data=dict(value))
        logger.warning(
            "feedback_not_an_object", source=source, decoded_type=type(value).__name__
        )
        return ParsedFeedback(issue=FeedbackIssue.NOT_AN_OBJECT)

    logger.warning("feedback_unsupported_type", source=source, raw_type=type(raw).__name__)
    return ParsedFeedback(issue=FeedbackIssue.UNSUPPORTED_TYPE)


def parse_transcript(record: RawCandidateRecord) -> ParsedFeedback:
    """Parse a candidate's conversation transcript."""
    return parse_feedback(record.conversation_transcript, source="transcript")


def feedback_from_transcript(transcript: Mapping[str, Any]) -> ParsedFeedback:
    """Parse the ``feedback`` value of an already-parsed transcript.

    A payload that only wraps another ``feedback`` value (an older nesting)
    is unwrapped once.
    """
    parsed = parse_feedback(transcript.get(FEEDBACK_KEY))
    if parsed.ok and set(parsed.data) == {FEEDBACK_KEY}:
        parsed = parse_feedback(parsed.data[FEEDBACK_KEY])
    return parsed


def extract_feedback(record: RawCandidateRecord) -> ParsedFeedback:
    """Locate and parse the feedback payload inside a candidate record."""
    return feedback_from_transcript(parse_transcript(record).data)


def _decode_any(raw: Any, source: str, *, plain_text_ok: bool = False) -> Any:
    if isinstance(raw, str):
        value, issue = _decode_text(raw)
        if issue is not None:
            if plain_text_ok:
                return raw
            logger.warning("interview_field_malformed_json", source=source)
            return None
        return value
    return raw


def parse_question_list(interview: InterviewDetail) -> list[str]:
    """Question texts of an interview, in order.

    Accepts a list of question objects (or plain strings), the same wrapped
    in ``{"interviewQuestions": [...]}``, or either as JSON text.
    """
    value = _decode_any(interview.question_list, source="question_list")
    if isinstance(value, Mapping):
        value = value.get(QUESTION_CONTAINER_KEY)
    if not isinstance(value, list):
        return []

    questions: list[str] = []
    for item in value:
        text = None
        if isinstance(item, Mapping):
            text = next((item[key] for key in QUESTION_TEXT_KEYS if item.get(key)), None)
        elif isinstance(item, str):
            text = item
        if isinstance(text, str) and text.strip():
            questions.append(text.strip())
    return questions


def parse_interview_type(interview: InterviewDetail) -> str | None:
    """First interview type label, if any."""
    value = _decode_any(interview.type, source="type", plain_text_ok=True)
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None

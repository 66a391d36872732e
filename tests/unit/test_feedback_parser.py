"""Feedback parser: every shape of raw value yields a mapping, nothing raises."""

import json

import pytest

from irap.core.feedback.parser import (
    extract_feedback,
    parse_feedback,
    parse_interview_type,
    parse_question_list,
)
from irap.core.models import FeedbackIssue, InterviewDetail, RawCandidateRecord

from conftest import make_feedback, make_record


def test_absent_feedback_is_empty_not_failure():
    parsed = parse_feedback(None)
    assert parsed.data == {}
    assert parsed.ok


def test_mapping_is_returned_as_is():
    feedback = make_feedback()
    parsed = parse_feedback(feedback)
    assert parsed.data == feedback
    assert parsed.ok


def test_json_text_is_decoded():
    parsed = parse_feedback(json.dumps({"Recommendation": "Yes"}))
    assert parsed.data == {"Recommendation": "Yes"}


def test_double_encoded_json_is_decoded():
    parsed = parse_feedback(json.dumps(json.dumps({"summary": "Solid."})))
    assert parsed.data == {"summary": "Solid."}


@pytest.mark.parametrize("raw", ["{not json", "Recommendation: yes", "{'single': 'quotes'}", "[1, 2"])
def test_malformed_text_degrades_to_empty(raw):
    parsed = parse_feedback(raw)
    assert parsed.data == {}
    assert parsed.issue == FeedbackIssue.MALFORMED_JSON


@pytest.mark.parametrize(
    "raw, issue",
    [
        ("[1, 2, 3]", FeedbackIssue.NOT_AN_OBJECT),
        ("42", FeedbackIssue.NOT_AN_OBJECT),
        ('"just text"', FeedbackIssue.MALFORMED_JSON),
        ("null", None),
    ],
)
def test_json_that_is_not_an_object_degrades_to_empty(raw, issue):
    parsed = parse_feedback(raw)
    assert parsed.data == {}
    assert parsed.issue == issue


@pytest.mark.parametrize("raw", ["[" * 200_000, '{"a":' * 200_000])
def test_pathologically_nested_text_degrades_to_empty(raw):
    parsed = parse_feedback(raw)
    assert parsed.data == {}
    assert parsed.issue == FeedbackIssue.MALFORMED_JSON


def test_blank_text_is_treated_as_absent():
    parsed = parse_feedback("   ")
    assert parsed.data == {}
    assert parsed.ok


@pytest.mark.parametrize("raw", [42, 3.5, ["a"], object()])
def test_other_types_are_treated_as_absent(raw):
    parsed = parse_feedback(raw)
    assert parsed.data == {}
    assert parsed.issue == FeedbackIssue.UNSUPPORTED_TYPE


def test_extract_feedback_from_json_transcript():
    record = RawCandidateRecord.model_validate(
        make_record(conversationTranscript=json.dumps({"feedback": make_feedback()}))
    )
    assert extract_feedback(record).data["Recommendation"] == "Yes, strongly"


def test_extract_feedback_unwraps_legacy_nesting():
    record = RawCandidateRecord.model_validate(
        make_record(feedback={"feedback": json.dumps(make_feedback(summary="Nested."))})
    )
    assert extract_feedback(record).data["summary"] == "Nested."


def test_extract_feedback_with_missing_transcript():
    record = RawCandidateRecord.model_validate(make_record(conversationTranscript=None))
    parsed = extract_feedback(record)
    assert parsed.data == {} and parsed.ok


def test_question_list_variants():
    wrapped = InterviewDetail(
        interview_id="a",
        questionList=json.dumps({"interviewQuestions": [{"question": "Q1"}, {"Interviewquestion": "Q2"}]}),
    )
    plain = InterviewDetail(interview_id="b", questionList=[{"question": "Q1"}, "Q2", {"other": 1}])
    broken = InterviewDetail(interview_id="c", questionList="{oops")

    assert parse_question_list(wrapped) == ["Q1", "Q2"]
    assert parse_question_list(plain) == ["Q1", "Q2"]
    assert parse_question_list(broken) == []


def test_interview_type_variants():
    assert parse_interview_type(InterviewDetail(interview_id="a", type='["Technical"]')) == "Technical"
    assert parse_interview_type(InterviewDetail(interview_id="b", type=["Behavioral"])) == "Behavioral"
    assert parse_interview_type(InterviewDetail(interview_id="c", type="Technical")) == "Technical"
    assert parse_interview_type(InterviewDetail(interview_id="d")) is None

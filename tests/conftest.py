"""Shared fixtures: store snapshots shaped like the hosted database rows."""

import json

import pytest

from irap.core.storage.object_store import ObjectStore


@pytest.fixture(autouse=True)
def _test_env(monkeypatch):
    monkeypatch.setenv("IRAP_ENV", "test")


def make_feedback(**overrides):
    feedback = {
        "rating": {
            "TechnicalSkills": 8,
            "Communication": 6,
            "ProblemSolving": 7,
            "Experience": 9,
            "Behavioral": 5,
            "Analysis": 7,
        },
        "summary": "Good communicator. Needs more technical depth.",
        "Recommendation": "Yes, strongly",
        "RecommendationMessage": "Move to the onsite round.",
    }
    feedback.update(overrides)
    return feedback


def make_record(email="ada@example.com", feedback=None, **overrides):
    record = {
        "id": 1,
        "email": email,
        "fullName": "Ada Lovelace",
        "conversationTranscript": {
            "feedback": make_feedback() if feedback is None else feedback,
            "messages": [{"role": "assistant", "content": "Tell me about yourself."}],
        },
        "recommendations": "Strong hire",
        "completedAt": "2026-03-14T09:30:00Z",
        "interviewId": "int-1",
    }
    record.update(overrides)
    return record


def make_interview(results, **overrides):
    interview = {
        "interview_id": "int-1",
        "jobPosition": "Backend Engineer",
        "jobDescription": "Build APIs.",
        "userEmail": "recruiter@example.com",
        "duration": "30 Min",
        "created_at": "2026-03-01T10:00:00+00:00",
        "type": json.dumps(["Technical", "Behavioral"]),
        "questionList": json.dumps(
            {"interviewQuestions": [{"question": "What is a race condition?"}]}
        ),
        "interview_results": results,
    }
    interview.update(overrides)
    return interview


@pytest.fixture
def store(tmp_path):
    return ObjectStore(tmp_path / "store")


@pytest.fixture
def seeded_store(store):
    store.save_interview(
        make_interview(
            [
                make_record(completedAt="2026-03-14T09:30:00Z"),
                make_record(
                    id=2,
                    email="grace@example.com",
                    fullName=None,
                    fullname="Grace Hopper",
                    feedback=json.dumps(make_feedback(Recommendation="No")),
                ),
                make_record(
                    id=3,
                    feedback=make_feedback(summary="Retook the interview. Much improved!"),
                    completedAt="2026-03-20T16:05:00Z",
                ),
            ]
        )
    )
    store.save_interview(
        make_interview(
            [],
            interview_id="int-empty",
            userEmail="other@example.com",
            created_at="2026-04-02T08:00:00+00:00",
        )
    )
    return store


def put_cv(store, reference, content=b"%PDF-1.4 test cv"):
    path = store.cv_dir / reference
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path

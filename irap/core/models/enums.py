"""Enumeration types for IRAP models."""

import re
from enum import Enum


class SkillKey(str, Enum):
    """The six rated skills, in display and export order."""

    TECHNICAL_SKILLS = "TechnicalSkills"
    COMMUNICATION = "Communication"
    PROBLEM_SOLVING = "ProblemSolving"
    EXPERIENCE = "Experience"
    BEHAVIORAL = "Behavioral"
    ANALYSIS = "Analysis"

    @property
    def label(self) -> str:
        """Human label, e.g. "Technical Skills"."""
        return re.sub(r"(?<!^)(?=[A-Z])", " ", self.value)


SKILL_KEYS: tuple[str, ...] = tuple(key.value for key in SkillKey)


class FeedbackIssue(str, Enum):
    """Why a raw feedback value was replaced by the empty default."""

    MALFORMED_JSON = "malformed_json"
    NOT_AN_OBJECT = "not_an_object"
    UNSUPPORTED_TYPE = "unsupported_type"


class SummarySplitPolicy(str, Enum):
    """How a summary given as one string is broken into lines."""

    SENTENCE = "sentence"
    NEWLINE = "newline"


class ExportFormat(str, Enum):
    """Downloadable report formats."""

    CSV = "csv"
    SPREADSHEET = "xlsx"

"""File-based object store for interview snapshots, candidate assets and exports.

Stands in for the hosted database: each interview is one JSON document
holding its candidate results, and the per-candidate supplementary lookup
is a single ``users.json`` keyed by email, with CV files under
``cv-uploads/``. Exports and CVs are delivered by writing to a temporary
file and renaming it into place.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from ..models.candidate import CandidateAssets, RawCandidateRecord
from ..models.export import ExportPayload
from ..models.interview import InterviewDetail
from ...observability.logger import get_logger

logger = get_logger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|\x00-\x1f]+")


class ObjectStore:
    """Simple JSON-backed persistence layer."""

    def __init__(self, base_dir: str | Path | None = None):
        self.base_dir = Path(base_dir) if base_dir else Path("data/store")
        self.base_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------
    @property
    def interviews_dir(self) -> Path:
        return self.base_dir / "interviews"

    @property
    def users_path(self) -> Path:
        return self.base_dir / "users.json"

    @property
    def cv_dir(self) -> Path:
        return self.base_dir / "cv-uploads"

    def _dump(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")

    def _load(self, path: Path) -> Any | None:
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    # ------------------------------------------------------------------
    # Interviews and candidate results
    # ------------------------------------------------------------------
    def save_interview(self, interview: dict[str, Any]) -> None:
        interview_id = interview.get("interview_id") or interview.get("interviewId")
        if not interview_id:
            raise ValueError("Interview snapshot has no interview_id")
        self._dump(self.interviews_dir / f"{interview_id}.json", interview)

    def load_interview(self, interview_id: str) -> InterviewDetail | None:
        data = self._load(self.interviews_dir / f"{interview_id}.json")
        return InterviewDetail.model_validate(data) if data else None

    def list_interview_ids(self) -> list[str]:
        if not self.interviews_dir.exists():
            return []
        return sorted(p.stem for p in self.interviews_dir.glob("*.json"))

    def list_candidate_records(self, interview_id: str) -> list[RawCandidateRecord]:
        interview = self.load_interview(interview_id)
        return list(interview.interview_results) if interview else []

    def load_candidate_record(self, interview_id: str, key: str) -> RawCandidateRecord | None:
        """Latest record of an interview whose email (any case) or id equals ``key``."""
        wanted = key.strip().lower()
        match: RawCandidateRecord | None = None
        for record in self.list_candidate_records(interview_id):
            if (record.email or "").strip().lower() == wanted or record.id == key:
                match = record
        return match

    # ------------------------------------------------------------------
    # Supplementary candidate lookup
    # ------------------------------------------------------------------
    def _load_users(self) -> dict[str, Any]:
        try:
            data = self._load(self.users_path)
        except (OSError, ValueError) as e:
            logger.warning("candidate_assets_unreadable", path=str(self.users_path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def save_candidate_assets(self, assets: CandidateAssets) -> None:
        if not assets.email:
            raise ValueError("Candidate assets need an email key")
        users = self._load_users()
        users[assets.email.lower()] = assets.model_dump(exclude={"email"}, exclude_none=True)
        self._dump(self.users_path, users)

    def resolve_cv(self, cv_file_path: str | None) -> Path | None:
        """Stored CV file for a reference, or None when it does not exist.

        Relative references are looked up under ``cv-uploads/``.
        """
        if not cv_file_path:
            return None
        path = Path(cv_file_path)
        if not path.is_absolute():
            path = self.cv_dir / path
        return path if path.is_file() else None

    def lookup_candidate_assets(self, email: str | None) -> CandidateAssets:
        """CV and picture references for a candidate.

        Anything missing means the feature is not available, never an error.
        A CV reference whose file is gone is dropped.
        """
        if not email:
            return CandidateAssets()
        entry = self._load_users().get(email.strip().lower())
        if not isinstance(entry, dict):
            return CandidateAssets(email=email)

        cv_file_path = entry.get("cv_file_path") or None
        if cv_file_path and self.resolve_cv(cv_file_path) is None:
            logger.info("candidate_cv_missing", email=email, cv_file_path=cv_file_path)
            cv_file_path = None
        return CandidateAssets(
            email=email,
            cv_file_path=cv_file_path,
            picture=entry.get("picture") or None,
        )

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------
    def _write_atomic(self, directory: str | Path, filename: str, content: bytes) -> Path:
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / filename

        fd, tmp_name = tempfile.mkstemp(dir=target_dir, prefix=f".{filename}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return target

    def save_export(self, payload: ExportPayload, directory: str | Path) -> Path:
        """Write an export atomically and return its final path."""
        target = self._write_atomic(directory, payload.filename, payload.content)
        logger.info("export_delivered", path=str(target), size_bytes=len(payload.content))
        return target

    def save_candidate_cv(
        self, assets: CandidateAssets, candidate_name: str, directory: str | Path
    ) -> Path | None:
        """Copy a candidate's CV to ``{candidate_name}_CV.pdf`` in ``directory``.

        Returns None when the candidate has no CV or its file is missing.
        """
        source = self.resolve_cv(assets.cv_file_path)
        if source is None:
            logger.info("candidate_cv_unavailable", email=assets.email)
            return None

        filename = f"{_safe_filename(candidate_name)}_CV.pdf"
        target = self._write_atomic(directory, filename, source.read_bytes())
        logger.info("candidate_cv_delivered", email=assets.email, path=str(target))
        return target


def _safe_filename(name: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", name).strip(" ._") or "candidate"

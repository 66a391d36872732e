"""Sanity checks for the file-backed object store."""

import json

from irap.core.models import CandidateAssets, ExportFormat, ExportPayload
from irap.core.storage.object_store import ObjectStore

from conftest import make_interview, make_record, put_cv


def test_interview_roundtrip(store):
    store.save_interview(make_interview([make_record(), make_record(id=2, email="grace@example.com")]))

    interview = store.load_interview("int-1")
    assert interview and interview.job_position == "Backend Engineer"
    assert [r.email for r in store.list_candidate_records("int-1")] == ["ada@example.com", "grace@example.com"]
    assert store.list_interview_ids() == ["int-1"]
    assert store.load_interview("missing") is None
    assert store.list_candidate_records("missing") == []


def test_load_candidate_record_prefers_latest(store):
    store.save_interview(
        make_interview([make_record(id=1), make_record(id=2, email="grace@example.com"), make_record(id=3)])
    )
    assert store.load_candidate_record("int-1", "ADA@example.com").id == "3"
    assert store.load_candidate_record("int-1", "2").email == "grace@example.com"
    assert store.load_candidate_record("int-1", "nobody@example.com") is None


def test_candidate_assets_lookup(store):
    put_cv(store, "cv/ada.pdf")
    store.save_candidate_assets(CandidateAssets(email="Ada@Example.com", cv_file_path="cv/ada.pdf"))

    found = store.lookup_candidate_assets("ada@example.com")
    assert found.cv_available and found.cv_file_path == "cv/ada.pdf"
    assert not found.picture_available

    assert not store.lookup_candidate_assets("grace@example.com").cv_available
    assert not store.lookup_candidate_assets(None).cv_available


def test_unreadable_assets_file_means_not_available(tmp_path):
    store = ObjectStore(tmp_path / "store")
    store.users_path.write_text("{broken", encoding="utf-8")
    assert not store.lookup_candidate_assets("ada@example.com").cv_available

    store.users_path.write_text(json.dumps(["not", "a", "mapping"]), encoding="utf-8")
    assert not store.lookup_candidate_assets("ada@example.com").cv_available


def test_save_export_is_atomic(store, tmp_path):
    payload = ExportPayload(
        filename="candidates.csv",
        content=b"Name\r\nAda\r\n",
        media_type="text/csv",
        export_format=ExportFormat.CSV,
        row_count=1,
    )
    out_dir = tmp_path / "exports"

    path = store.save_export(payload, out_dir)

    assert path == out_dir / "candidates.csv"
    assert path.read_bytes() == b"Name\r\nAda\r\n"
    assert [p.name for p in out_dir.iterdir()] == ["candidates.csv"]


def test_cv_reference_without_a_file_is_not_available(store):
    store.save_candidate_assets(
        CandidateAssets(email="ada@example.com", cv_file_path="cv/gone.pdf", picture="https://img/ada.png")
    )

    found = store.lookup_candidate_assets("ada@example.com")

    assert not found.cv_available
    assert found.picture_available
    assert store.resolve_cv("cv/gone.pdf") is None
    assert store.save_candidate_cv(found, "Ada", store.base_dir / "out") is None
    assert not (store.base_dir / "out").exists()


def test_save_candidate_cv_copies_file(store, tmp_path):
    put_cv(store, "cv/ada.pdf", b"%PDF-1.4 ada")
    assets = CandidateAssets(email="ada@example.com", cv_file_path="cv/ada.pdf")
    out_dir = tmp_path / "downloads"

    path = store.save_candidate_cv(assets, "Ada/Lovelace: PhD", out_dir)

    assert path == out_dir / "Ada_Lovelace_ PhD_CV.pdf"
    assert path.read_bytes() == b"%PDF-1.4 ada"
    assert [p.name for p in out_dir.iterdir()] == [path.name]


def test_absolute_cv_reference(store, tmp_path):
    cv = tmp_path / "elsewhere.pdf"
    cv.write_bytes(b"%PDF")
    assert store.resolve_cv(str(cv)) == cv

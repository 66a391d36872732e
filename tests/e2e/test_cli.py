"""CLI smoke tests through Typer's runner."""

from typer.testing import CliRunner

from irap.cli.main import app
from irap.core.models import CandidateAssets

from conftest import put_cv

# Wide terminal so Rich tables never wrap cell text
runner = CliRunner(env={"COLUMNS": "200"})


def _store_args(store):
    return ["--store", str(store.base_dir)]


def test_interview_command(seeded_store):
    result = runner.invoke(app, ["interview", "-i", "int-1", *_store_args(seeded_store)])
    assert result.exit_code == 0, result.output
    assert "Backend Engineer" in result.output
    assert "What is a race condition?" in result.output
    assert "Technical" in result.output


def test_candidates_command(seeded_store):
    result = runner.invoke(app, ["candidates", "-i", "int-1", *_store_args(seeded_store)])
    assert result.exit_code == 0, result.output
    assert "Grace Hopper" in result.output
    assert result.output.count("ada@example.com") == 1


def test_report_command(seeded_store):
    result = runner.invoke(
        app, ["report", "-i", "int-1", "-c", "grace@example.com", *_store_args(seeded_store)]
    )
    assert result.exit_code == 0, result.output
    assert "7/10" in result.output
    assert "Technical Skills" in result.output


def test_report_unknown_candidate(seeded_store):
    result = runner.invoke(
        app, ["report", "-i", "int-1", "-c", "nobody@example.com", *_store_args(seeded_store)]
    )
    assert result.exit_code == 1


def test_export_writes_file(seeded_store, tmp_path):
    out_dir = tmp_path / "exports"
    result = runner.invoke(
        app,
        ["export", "-i", "int-1", "--format", "xlsx", "--detail", "-o", str(out_dir), *_store_args(seeded_store)],
    )
    assert result.exit_code == 0, result.output
    assert (out_dir / "interview_results.xlsx").exists()


def test_export_empty_interview_is_a_notice_not_an_error(seeded_store, tmp_path):
    out_dir = tmp_path / "exports"
    result = runner.invoke(
        app, ["export", "-i", "int-empty", "-o", str(out_dir), *_store_args(seeded_store)]
    )
    assert result.exit_code == 0, result.output
    assert "No candidate data to export" in result.output
    assert not out_dir.exists()


def test_export_unknown_interview(seeded_store):
    result = runner.invoke(app, ["export", "-i", "missing", *_store_args(seeded_store)])
    assert result.exit_code == 1


def test_interviews_command_lists_newest_first(seeded_store):
    result = runner.invoke(app, ["interviews", *_store_args(seeded_store)])
    assert result.exit_code == 0, result.output
    assert result.output.index("int-empty") < result.output.index("int-1")
    assert "02 Apr 2026" in result.output


def test_interviews_command_filters_by_owner(seeded_store):
    result = runner.invoke(app, ["interviews", "--owner", "other@example.com", *_store_args(seeded_store)])
    assert result.exit_code == 0, result.output
    assert "int-empty" in result.output
    assert "int-1" not in result.output


def test_interviews_command_with_empty_store(store):
    result = runner.invoke(app, ["interviews", *_store_args(store)])
    assert result.exit_code == 0, result.output
    assert "any interviews yet" in result.output


def test_report_downloads_cv(seeded_store, tmp_path):
    put_cv(seeded_store, "cv/grace.pdf", b"%PDF-1.4 grace")
    seeded_store.save_candidate_assets(
        CandidateAssets(email="grace@example.com", cv_file_path="cv/grace.pdf", picture="https://img/grace.png")
    )
    out_dir = tmp_path / "downloads"

    result = runner.invoke(
        app,
        ["report", "-i", "int-1", "-c", "grace@example.com", "--download-cv", "-o", str(out_dir), *_store_args(seeded_store)],
    )

    assert result.exit_code == 0, result.output
    assert "https://img/grace.png" in result.output
    assert "CV downloaded successfully!" in result.output
    assert (out_dir / "Grace Hopper_CV.pdf").read_bytes() == b"%PDF-1.4 grace"


def test_report_download_cv_not_available(seeded_store, tmp_path):
    out_dir = tmp_path / "downloads"
    result = runner.invoke(
        app,
        ["report", "-i", "int-1", "-c", "grace@example.com", "--download-cv", "-o", str(out_dir), *_store_args(seeded_store)],
    )
    assert result.exit_code == 0, result.output
    assert "CV not available" in result.output
    assert not out_dir.exists()

import json

import pytest

from autoshorts.core.exceptions import JobStateError
from autoshorts.models.generation import GeneratedScript, GenerationJob, Scene, VideoCategory
from autoshorts.models.status import JobStage
from autoshorts.services.infrastructure.orchestration import JobLedger


def ready_job(created_at="2026-03-02T09:00:00"):
    job = GenerationJob(category=VideoCategory.SCHOOL_TIPS, ad_injected=False, created_at=created_at)
    job.apply_script(GeneratedScript("T", "C", "F", [Scene("n", "v")]))
    job.advance(JobStage.AUDIO)
    job.advance(JobStage.VIDEO)
    job.add_video_artifact("/out/scene_1.mp4")
    job.advance(JobStage.READY)
    return job


def failed_job(created_at="2026-03-02T10:00:00"):
    job = GenerationJob(category=VideoCategory.MOTIVATION, ad_injected=True, created_at=created_at)
    job.fail("quota")
    return job


@pytest.fixture
def ledger(tmp_path):
    return JobLedger(tmp_path)


def test_only_terminal_jobs_are_recorded(ledger):
    job = GenerationJob(category=VideoCategory.SCHOOL_TIPS, ad_injected=False)
    with pytest.raises(JobStateError):
        ledger.append(job)
    assert len(ledger) == 0


def test_jobs_are_listed_newest_first(ledger):
    older, newer = ready_job("2026-03-01T08:00:00"), failed_job("2026-03-02T08:00:00")
    ledger.append(older)
    ledger.append(newer)

    assert [job.id for job in ledger.list()] == [newer.id, older.id]
    assert [job.id for job in ledger.list(JobStage.READY)] == [older.id]


def test_entries_persist_across_instances(ledger, tmp_path):
    job = ready_job()
    ledger.append(job)

    reloaded = JobLedger(tmp_path)
    assert reloaded.get(job.id).to_dict() == job.to_dict()


def test_unreadable_files_are_skipped(tmp_path):
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "partial.json").write_text(json.dumps({"stage": "ready"}), encoding="utf-8")
    assert len(JobLedger(tmp_path)) == 0


def test_publish_ready_job(ledger, tmp_path):
    job = ready_job()
    ledger.append(job)

    published = ledger.mark_published(job.id)

    assert published.stage is JobStage.PUBLISHED
    assert JobLedger(tmp_path).get(job.id).stage is JobStage.PUBLISHED


def test_publish_is_only_allowed_from_ready(ledger):
    job = failed_job()
    ledger.append(job)
    with pytest.raises(JobStateError):
        ledger.mark_published(job.id)

    ready = ready_job()
    ledger.append(ready)
    ledger.mark_published(ready.id)
    with pytest.raises(JobStateError):
        ledger.mark_published(ready.id)


def test_publish_unknown_job(ledger):
    with pytest.raises(KeyError):
        ledger.mark_published("missing")

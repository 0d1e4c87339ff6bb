from matching.reconciler import candidate_name, reconcile
from schemas import (
    AnalysisResult,
    BatchItem,
    FileStatus,
    FileUploadStatus,
    Job,
    ResumeText,
)
from tests.conftest import analysis_payload, txt_file


def _status(i, name):
    return FileUploadStatus(id=f"id-{i}", file=txt_file(name), status=FileStatus.PROCESSING)


def _item(i, name, score, **kw):
    return BatchItem(index=i, file_name=name, analysis=AnalysisResult.model_validate(analysis_payload(score, **kw)))


def test_candidate_name():
    assert candidate_name("jane_doe.pdf") == "jane doe"
    assert candidate_name("Report.Final.txt") == "Report.Final"
    assert candidate_name("no_extension") == "no extension"


def test_alice_and_bob_sorted_by_score():
    statuses = [_status(0, "bob.txt"), _status(1, "alice.pdf")]
    items = [_item(0, "bob.txt", 40), _item(1, "alice.pdf", 90)]
    texts = [ResumeText(file_name="bob.txt", text="bob cv"), ResumeText(file_name="alice.pdf", text="alice cv")]

    result = reconcile(statuses, items, texts)

    assert [(a.candidate_name, a.relevance_score) for a in result.analyses] == [("alice", 90), ("bob", 40)]
    assert result.analyses[0].resume_text == "alice cv"
    assert result.analyses[0].id == "id-1"


def test_record_fields():
    statuses = [_status(0, "jane_doe.pdf")]
    items = [_item(0, "jane_doe.pdf", 75, matching=("Python", "SQL", "AWS"), missing=("Go",))]
    job = Job(id="j1", title="Backend Engineer")

    analysis = reconcile(statuses, items, [ResumeText(file_name="jane_doe.pdf", text="t")], job=job).analyses[0]

    assert analysis.key_skills_match == 3
    assert analysis.missing_skills == ["Go"]
    assert analysis.job == job
    assert analysis.full_analysis == items[0].analysis


def test_matched_statuses_become_success_and_inputs_are_untouched():
    statuses = [_status(0, "a.txt"), _status(1, "b.txt")]
    items = [_item(0, "a.txt", 10)]
    texts = [ResumeText(file_name="a.txt", text=""), ResumeText(file_name="b.txt", text="")]

    result = reconcile(statuses, items, texts)

    assert [s.status for s in result.statuses] == [FileStatus.SUCCESS, FileStatus.PROCESSING]
    assert [s.status for s in statuses] == [FileStatus.PROCESSING, FileStatus.PROCESSING]


def test_duplicate_filenames_do_not_collide():
    statuses = [_status(0, "cv.txt"), _status(1, "cv.txt")]
    items = [_item(0, "cv.txt", 30), _item(1, "cv.txt", 80)]
    texts = [ResumeText(file_name="cv.txt", text="first"), ResumeText(file_name="cv.txt", text="second")]

    result = reconcile(statuses, items, texts)

    assert all(s.status == FileStatus.SUCCESS for s in result.statuses)
    assert [(a.id, a.resume_text) for a in result.analyses] == [("id-1", "second"), ("id-0", "first")]


def test_reconcile_is_pure_and_sorted():
    statuses = [_status(i, f"c{i}.txt") for i in range(4)]
    scores = [55, 90, 55, 10]
    items = [_item(i, f"c{i}.txt", s) for i, s in enumerate(scores)]
    texts = [ResumeText(file_name=f"c{i}.txt", text=str(i)) for i in range(4)]

    first = reconcile(statuses, items, texts)
    second = reconcile(statuses, items, texts)

    assert first == second
    got = [a.relevance_score for a in first.analyses]
    assert got == sorted(got, reverse=True)
    # ties keep submission order
    assert [a.id for a in first.analyses] == ["id-1", "id-0", "id-2", "id-3"]
    assert len(first.analyses) <= len(statuses)


def test_item_without_matching_file_is_skipped():
    statuses = [_status(0, "a.txt")]
    items = [_item(0, "other.txt", 50)]
    result = reconcile(statuses, items, [ResumeText(file_name="a.txt", text="")])
    assert result.analyses == []
    assert result.statuses[0].status == FileStatus.PROCESSING

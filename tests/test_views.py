from matching.views import filter_and_sort, to_dataframe, top_missing_skills, verdict_distribution
from schemas import AD_HOC_JOB, AnalysisResult, StoredAnalysis
from tests.conftest import analysis_payload


def _stored(name, score, verdict="High", missing=()):
    analysis = AnalysisResult.model_validate(analysis_payload(score, verdict=verdict, missing=missing))
    return StoredAnalysis(
        id=name,
        candidate_name=name,
        job=AD_HOC_JOB,
        relevance_score=score,
        verdict=analysis.verdict,
        key_skills_match=len(analysis.matching_skills),
        missing_skills=list(missing),
        full_analysis=analysis,
    )


RESULTS = [
    _stored("Carol", 55, "Medium", missing=("Docker",)),
    _stored("alice", 90, "High"),
    _stored("Bob", 20, "Low", missing=("Docker", "Kubernetes")),
]


def test_default_sort_is_score_descending():
    assert [a.candidate_name for a in filter_and_sort(RESULTS)] == ["alice", "Carol", "Bob"]


def test_other_sorts():
    assert [a.candidate_name for a in filter_and_sort(RESULTS, sort_by="score-asc")] == ["Bob", "Carol", "alice"]
    assert [a.candidate_name for a in filter_and_sort(RESULTS, sort_by="name-asc")] == ["alice", "Bob", "Carol"]


def test_search_and_verdict_filters():
    assert [a.candidate_name for a in filter_and_sort(RESULTS, search=" AL ")] == ["alice"]
    assert [a.candidate_name for a in filter_and_sort(RESULTS, verdict="Low")] == ["Bob"]
    assert filter_and_sort(RESULTS, search="zed") == []


def test_verdict_distribution_has_every_verdict():
    assert verdict_distribution(RESULTS[:1]) == {"High": 0, "Medium": 1, "Low": 0}


def test_top_missing_skills():
    assert top_missing_skills(RESULTS) == [("Docker", 2), ("Kubernetes", 1)]


def test_dataframe():
    df = to_dataframe(RESULTS)
    assert list(df["Candidate"]) == ["Carol", "alice", "Bob"]
    assert df.loc[2, "Missing Skills"] == "Docker, Kubernetes"
    assert to_dataframe([]).empty

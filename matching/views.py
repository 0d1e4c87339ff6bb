from collections import Counter
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from schemas import StoredAnalysis, Verdict

SORT_OPTIONS = {
    "score-desc": "Score: High to Low",
    "score-asc": "Score: Low to High",
    "name-asc": "Candidate: A-Z",
}
VERDICT_FILTERS = ["All"] + [v.value for v in Verdict]


def filter_and_sort(
    analyses: Sequence[StoredAnalysis],
    search: str = "",
    verdict: str = "All",
    sort_by: str = "score-desc",
) -> List[StoredAnalysis]:
    """Name search, verdict filter and sort for the results table."""
    results = list(analyses)

    term = (search or "").strip().lower()
    if term:
        results = [a for a in results if term in a.candidate_name.lower()]

    if verdict and verdict != "All":
        results = [a for a in results if a.verdict.value == verdict]

    if sort_by == "score-asc":
        results.sort(key=lambda a: a.relevance_score)
    elif sort_by == "name-asc":
        results.sort(key=lambda a: a.candidate_name.lower())
    else:
        results.sort(key=lambda a: a.relevance_score, reverse=True)
    return results


def verdict_distribution(analyses: Sequence[StoredAnalysis]) -> Dict[str, int]:
    counts = Counter(a.verdict.value for a in analyses)
    return {v.value: counts.get(v.value, 0) for v in Verdict}


def top_missing_skills(analyses: Sequence[StoredAnalysis], limit: int = 10) -> List[Tuple[str, int]]:
    counts = Counter(skill for a in analyses for skill in a.missing_skills)
    return counts.most_common(limit)


def to_dataframe(analyses: Sequence[StoredAnalysis]) -> pd.DataFrame:
    """Flat table of the headline fields, one row per candidate."""
    rows = [
        {
            "Candidate": a.candidate_name,
            "Job": a.job.title,
            "Relevance Score": a.relevance_score,
            "Verdict": a.verdict.value,
            "Key Skills Matched": a.key_skills_match,
            "ATS Score": a.full_analysis.ats_analysis.score,
            "Missing Skills": ", ".join(a.missing_skills),
        }
        for a in analyses
    ]
    columns = ["Candidate", "Job", "Relevance Score", "Verdict", "Key Skills Matched", "ATS Score", "Missing Skills"]
    return pd.DataFrame(rows, columns=columns)

import logging
import re
from typing import List, NamedTuple, Optional, Sequence

from schemas import (
    AD_HOC_JOB,
    BatchItem,
    FileStatus,
    FileUploadStatus,
    Job,
    ResumeText,
    StoredAnalysis,
)

logger = logging.getLogger(__name__)

_LAST_EXTENSION = re.compile(r"\.[^/.]+$")


class Reconciliation(NamedTuple):
    analyses: List[StoredAnalysis]
    statuses: List[FileUploadStatus]


def candidate_name(file_name: str) -> str:
    """'jane_doe.pdf' -> 'jane doe'; only the last extension is stripped."""
    return _LAST_EXTENSION.sub("", file_name).replace("_", " ")


def reconcile(
    statuses: Sequence[FileUploadStatus],
    items: Sequence[BatchItem],
    resume_texts: Sequence[ResumeText],
    job: Optional[Job] = None,
) -> Reconciliation:
    """
    Merge batch results with what is known locally about each submitted file.

    Items are matched to statuses by submission index, so two uploads with the
    same filename stay distinct. Inputs are never mutated: the returned
    statuses are copies with matched entries marked ``success``; anything the
    batch did not answer for is returned as it was.
    """
    job = job or AD_HOC_JOB
    new_statuses = list(statuses)
    analyses: List[StoredAnalysis] = []

    for item in items:
        if not 0 <= item.index < len(statuses) or statuses[item.index].file.name != item.file_name:
            logger.warning(f"No submitted file at position {item.index} for '{item.file_name}'")
            continue

        status = statuses[item.index]
        analysis = item.analysis
        text = resume_texts[item.index].text if item.index < len(resume_texts) else ""

        analyses.append(
            StoredAnalysis(
                id=status.id,
                candidate_name=candidate_name(item.file_name),
                job=job,
                relevance_score=analysis.relevance_score,
                verdict=analysis.verdict,
                key_skills_match=len(analysis.matching_skills),
                missing_skills=list(analysis.missing_skills),
                missing_certifications=list(analysis.missing_certifications),
                missing_projects=list(analysis.missing_projects),
                full_analysis=analysis,
                resume_text=text,
            )
        )
        new_statuses[item.index] = status.model_copy(update={"status": FileStatus.SUCCESS, "error": None})

    # sorted() is stable: equal scores keep submission order
    analyses = sorted(analyses, key=lambda a: a.relevance_score, reverse=True)
    return Reconciliation(analyses=analyses, statuses=new_statuses)

import copy
from typing import List, Sequence

from matching.prompts import INSTRUCTION_PROMPT, JD_TEMPLATE, RESUME_TEMPLATE
from matching.response_schema import BATCH_ANALYSIS_SCHEMA
from schemas import AnalysisRequest, ResumeText


def resume_segment(ordinal: int, resume: ResumeText) -> str:
    return RESUME_TEMPLATE.format(ordinal=ordinal, file_name=resume.file_name, resume=resume.text)


def build_request(jd_text: str, resumes: Sequence[ResumeText]) -> AnalysisRequest:
    """
    Assemble the single batch request: instructions, the job description,
    then one block per resume numbered from 1 in input order.
    """
    if not resumes:
        raise ValueError("At least one resume is required to build an analysis request.")

    segments: List[str] = [INSTRUCTION_PROMPT, JD_TEMPLATE.format(jd=jd_text)]
    segments.extend(resume_segment(i, r) for i, r in enumerate(resumes, start=1))

    return AnalysisRequest(
        segments=segments,
        response_schema=copy.deepcopy(BATCH_ANALYSIS_SCHEMA),
        file_names=[r.file_name for r in resumes],
    )

import json
import logging
from typing import List, Protocol, Sequence, Tuple

import pydantic
from pydantic import TypeAdapter

from errors import EmptyResponse, SchemaMismatch
from matching.request_builder import build_request
from parsers.extract import extract_all
from schemas import AnalysisRequest, AnalysisResult, BatchItem, ResumeFile, ResumeText

logger = logging.getLogger(__name__)

_results_adapter = TypeAdapter(List[AnalysisResult])


class TextGenerator(Protocol):
    def generate(self, segments: List[str], response_schema: dict = None) -> str: ...


def _strip_fences(text: str) -> str:
    return text.replace("```json", "").replace("```", "").strip()


def parse_results(raw: str, expected: int) -> List[AnalysisResult]:
    """Validate the model payload against the batch contract."""
    text = _strip_fences(raw or "")
    if not text:
        raise EmptyResponse()

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaMismatch(f"The API returned malformed JSON: {e}") from e

    if not isinstance(parsed, list):
        raise SchemaMismatch("The API did not return a JSON array of analyses.")
    if len(parsed) != expected:
        raise SchemaMismatch(
            f"The API returned a different number of results than resumes provided "
            f"({len(parsed)} results for {expected} resumes)."
        )

    try:
        return _results_adapter.validate_python(parsed)
    except pydantic.ValidationError as e:
        raise SchemaMismatch(f"The API returned analyses that do not match the expected schema: {e}") from e


def run_batch(client: TextGenerator, request: AnalysisRequest) -> List[BatchItem]:
    """
    Issue the single model call for a batch and map each analysis back to its
    file by position. Either every item comes back or an exception is raised.
    """
    raw = client.generate(request.segments, response_schema=request.response_schema)
    results = parse_results(raw, request.resume_count)
    logger.info(f"Batch returned {len(results)} analyses")
    return [
        BatchItem(index=i, file_name=request.file_names[i], analysis=analysis)
        for i, analysis in enumerate(results)
    ]


def analyze_resumes(
    client: TextGenerator, jd_text: str, resumes: Sequence[ResumeFile]
) -> Tuple[List[BatchItem], List[ResumeText]]:
    """Extract every resume (all-or-nothing), then run one batch call."""
    texts = extract_all(resumes, "Resume")
    resume_texts = [ResumeText(file_name=f.name, text=t) for f, t in zip(resumes, texts)]
    request = build_request(jd_text, resume_texts)
    return run_batch(client, request), resume_texts

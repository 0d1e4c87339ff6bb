import logging

from errors import EmptyResponse
from matching.batch import TextGenerator
from matching.prompts import JD_TEMPLATE, ORIGINAL_RESUME_TEMPLATE, REWRITE_PROMPT

logger = logging.getLogger(__name__)


def rewrite_resume(client: TextGenerator, resume_text: str, jd_text: str) -> str:
    """Ask the model for a version of the resume tailored to the job description."""
    segments = [
        REWRITE_PROMPT,
        JD_TEMPLATE.format(jd=jd_text),
        ORIGINAL_RESUME_TEMPLATE.format(resume=resume_text),
    ]
    rewritten = client.generate(segments)
    if not rewritten or not rewritten.strip():
        raise EmptyResponse("The API returned an empty rewrite.")
    logger.info(f"Rewrote resume ({len(resume_text)} -> {len(rewritten)} characters)")
    return rewritten

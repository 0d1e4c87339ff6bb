import logging
import uuid
from typing import List, Optional, Sequence, Union

from errors import ScreeningError
from matching.batch import TextGenerator, analyze_resumes
from matching.reconciler import reconcile
from parsers.extract import extract_text
from schemas import (
    AD_HOC_JOB,
    BatchOutcome,
    FileStatus,
    FileUploadStatus,
    Job,
    JobDescription,
    ResumeFile,
    StoredAnalysis,
)

logger = logging.getLogger(__name__)

JobDescriptionInput = Union[str, ResumeFile, JobDescription]


class ScreeningSession:
    """
    Holds one operator's selected resumes, their statuses and the latest results.

    Status flow per file: pending -> processing -> success | error, and
    error -> processing when the operator re-runs the batch. Failures are
    batch-level: every file still processing gets the same message.
    """

    def __init__(self, client: TextGenerator):
        self.client = client
        self.statuses: List[FileUploadStatus] = []
        self.analyses: List[StoredAnalysis] = []
        self.error: Optional[str] = None
        self.failure: Optional[Exception] = None
        self.jd_text: str = ""

    def select_files(self, files: Sequence[ResumeFile]) -> List[FileUploadStatus]:
        self.statuses = [FileUploadStatus(id=str(uuid.uuid4()), file=f) for f in files]
        self.analyses = []
        self.error = None
        return self.statuses

    def reset(self) -> None:
        self.statuses = []
        self.analyses = []
        self.error = None
        self.failure = None
        self.jd_text = ""

    @property
    def runnable(self) -> bool:
        return any(s.status in (FileStatus.PENDING, FileStatus.ERROR) for s in self.statuses)

    def _mark_processing_as_error(self, message: str) -> None:
        self.statuses = [
            s.model_copy(update={"status": FileStatus.ERROR, "error": message})
            if s.status == FileStatus.PROCESSING else s
            for s in self.statuses
        ]

    def run(self, jd: JobDescriptionInput) -> BatchOutcome:
        if not self.runnable:
            return self.outcome()

        self.error = None
        self.failure = None
        self.analyses = []

        try:
            if isinstance(jd, JobDescription):
                jd_text, job = jd.description, Job(id=jd.id, title=jd.title)
            else:
                jd_text, job = extract_text(jd, "Job Description"), AD_HOC_JOB
        except ScreeningError as e:
            logger.error(f"Could not read job description: {e}")
            self.failure = e
            self.error = str(e)
            return self.outcome()

        self.jd_text = jd_text
        self.statuses = [
            s.model_copy(update={"status": FileStatus.PROCESSING, "error": None}) for s in self.statuses
        ]

        try:
            items, resume_texts = analyze_resumes(self.client, jd_text, [s.file for s in self.statuses])
        except ScreeningError as e:
            logger.error(f"Batch analysis failed: {e}")
            self.failure = e
            self.error = str(e)
            self._mark_processing_as_error(self.error)
            return self.outcome()
        except Exception:
            logger.exception("Unexpected error during batch analysis")
            self.error = "An unexpected error occurred during analysis."
            self._mark_processing_as_error(self.error)
            return self.outcome()

        result = reconcile(self.statuses, items, resume_texts, job=job)
        self.analyses = result.analyses
        self.statuses = result.statuses
        logger.info(f"Batch finished: {len(self.analyses)} of {len(self.statuses)} resumes analyzed")
        return self.outcome()

    def outcome(self) -> BatchOutcome:
        return BatchOutcome(
            statuses=list(self.statuses), analyses=list(self.analyses), error=self.error, jd_text=self.jd_text
        )

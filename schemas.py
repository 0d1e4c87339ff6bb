from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire (model output, API), snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Verdict(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class FileStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


def _clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, float(value)))


# -------------------------------------------------------------------
# Model output
# -------------------------------------------------------------------
class AtsAnalysis(CamelModel):
    score: float
    issues: List[str]

    @field_validator("score")
    @classmethod
    def clamp_score(cls, v: float) -> float:
        return _clamp_percent(v)


class LearningResource(CamelModel):
    skill: str
    links: List[str]


class AnalysisResult(CamelModel):
    """Per-resume verdict returned by the model. Every field is required."""

    relevance_score: float
    hard_match_percentage: float
    soft_match_percentage: float
    verdict: Verdict
    matching_skills: List[str]
    missing_skills: List[str]
    missing_certifications: List[str]
    missing_projects: List[str]
    suggested_improvements: List[str]
    summary: str
    ats_analysis: AtsAnalysis
    suggested_learning_resources: List[LearningResource]

    @field_validator("relevance_score", "hard_match_percentage", "soft_match_percentage")
    @classmethod
    def clamp_scores(cls, v: float) -> float:
        return _clamp_percent(v)


# -------------------------------------------------------------------
# Jobs and uploads
# -------------------------------------------------------------------
class JobDescription(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    title: str
    description: str


class JobIn(BaseModel):
    title: str
    description: str


class Job(CamelModel):
    id: str
    title: str
    department: str = ""


AD_HOC_JOB = Job(id="ad-hoc", title="Ad-hoc Job Description")


class ResumeFile(CamelModel):
    name: str
    content_type: str = ""
    data: bytes = Field(default=b"", exclude=True, repr=False)

    @property
    def extension(self) -> str:
        if "." not in self.name:
            return ""
        return "." + self.name.rsplit(".", 1)[-1].lower()


class FileUploadStatus(CamelModel):
    id: str
    file: ResumeFile
    status: FileStatus = FileStatus.PENDING
    error: Optional[str] = None


class ResumeText(CamelModel):
    file_name: str
    text: str


# -------------------------------------------------------------------
# Batch request / response
# -------------------------------------------------------------------
class AnalysisRequest(BaseModel):
    segments: List[str]
    response_schema: Dict[str, Any]
    file_names: List[str]

    @property
    def resume_count(self) -> int:
        return len(self.file_names)


class BatchItem(BaseModel):
    index: int
    file_name: str
    analysis: AnalysisResult


class StoredAnalysis(CamelModel):
    id: str
    candidate_name: str
    job: Job
    relevance_score: float
    verdict: Verdict
    key_skills_match: int
    missing_skills: List[str] = []
    missing_certifications: List[str] = []
    missing_projects: List[str] = []
    full_analysis: AnalysisResult
    resume_text: str = ""


class BatchOutcome(CamelModel):
    statuses: List[FileUploadStatus]
    analyses: List[StoredAnalysis] = []
    error: Optional[str] = None
    jd_text: str = ""
    rejected: List[str] = []


class RewriteIn(BaseModel):
    resume_text: str
    jd_text: str


class ThemeIn(BaseModel):
    theme: str

"""Structured-output contract for the batch analysis call.

The schema is written in the OpenAPI subset accepted by the model's
``responseSchema`` option. Parsed responses are validated separately against
``schemas.AnalysisResult``; both describe the same shape.
"""
from typing import Any, Dict, List, Optional

from schemas import Verdict


def _string(description: str = "", enum: Optional[List[str]] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "STRING"}
    if enum:
        schema["enum"] = enum
    if description:
        schema["description"] = description
    return schema


def _number(description: str) -> Dict[str, Any]:
    return {"type": "NUMBER", "description": description}


def _array(items: Dict[str, Any], description: str = "") -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "ARRAY", "items": items}
    if description:
        schema["description"] = description
    return schema


def _object(properties: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    # every property is required; list fields may still come back empty
    return {"type": "OBJECT", "properties": properties, "required": list(properties)}


ATS_ANALYSIS_SCHEMA = _object({
    "score": _number(
        "An ATS compatibility score from 0 to 100. Start at 100 and deduct points for issues found."
    ),
    "issues": _array(
        _string(),
        "Specific ATS compatibility issues found in the resume, such as images, columns or missing standard headings.",
    ),
})

LEARNING_RESOURCE_SCHEMA = _object({
    "skill": _string("The specific skill the learning resources are for."),
    "links": _array(
        _string(),
        "Direct URLs to learning resources (e.g. Coursera, YouTube, official documentation).",
    ),
})

ANALYSIS_RESULT_SCHEMA = _object({
    "relevanceScore": _number("A score from 0 to 100 representing overall relevance."),
    "hardMatchPercentage": _number("A percentage (0-100) of direct keyword/skill matches."),
    "softMatchPercentage": _number("A percentage (0-100) of conceptual and experience alignment."),
    "verdict": _string(
        "The final verdict on the candidate's fit.", enum=[v.value for v in Verdict]
    ),
    "matchingSkills": _array(_string(), "Key skills from the JD found in the resume."),
    "missingSkills": _array(_string(), "Critical skills from the JD missing from the resume."),
    "missingCertifications": _array(
        _string(), "Relevant certifications from the JD missing from the resume."
    ),
    "missingProjects": _array(
        _string(), "Relevant project types or experiences from the JD missing from the resume."
    ),
    "suggestedImprovements": _array(
        _string(), "Actionable suggestions for the candidate to improve their resume for this role."
    ),
    "summary": _string("A concise, one or two-sentence summary of the candidate's fit."),
    "atsAnalysis": ATS_ANALYSIS_SCHEMA,
    "suggestedLearningResources": _array(
        LEARNING_RESOURCE_SCHEMA,
        "One object per missing skill with suggested learning resource links.",
    ),
})

BATCH_ANALYSIS_SCHEMA = _array(ANALYSIS_RESULT_SCHEMA)

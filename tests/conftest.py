import json

import fitz

from schemas import ResumeFile


class FakeClient:
    """Stands in for GeminiClient: records every call, returns a canned answer."""

    def __init__(self, response="", error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate(self, segments, response_schema=None):
        self.calls.append((list(segments), response_schema))
        if self.error is not None:
            raise self.error
        return self.response


def analysis_payload(score, verdict="High", matching=("Python", "SQL"), missing=()):
    return {
        "relevanceScore": score,
        "hardMatchPercentage": score,
        "softMatchPercentage": score,
        "verdict": verdict,
        "matchingSkills": list(matching),
        "missingSkills": list(missing),
        "missingCertifications": [],
        "missingProjects": [],
        "suggestedImprovements": ["Quantify achievements"],
        "summary": "Solid fit.",
        "atsAnalysis": {"score": 85, "issues": ["Uses a two-column layout"]},
        "suggestedLearningResources": [
            {"skill": s, "links": ["https://example.com/learn"]} for s in missing
        ],
    }


def batch_response(*payloads):
    return json.dumps(list(payloads))


def make_pdf(*pages):
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def txt_file(name, text="Experienced Python developer", content_type="text/plain"):
    return ResumeFile(name=name, content_type=content_type, data=text.encode("utf-8"))


def pdf_file(name, *pages):
    return ResumeFile(name=name, content_type="application/pdf", data=make_pdf(*pages or ("Resume",)))

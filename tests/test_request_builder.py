import pytest

from matching.prompts import INSTRUCTION_PROMPT
from matching.request_builder import build_request
from schemas import ResumeText

RESUMES = [
    ResumeText(file_name="alice.pdf", text="Alice knows Python"),
    ResumeText(file_name="bob.txt", text="Bob knows Java"),
]


def test_segments_are_ordered_and_labeled():
    request = build_request("Backend engineer", RESUMES)

    assert request.segments[0] == INSTRUCTION_PROMPT
    assert request.segments[1] == "**Job Description:**\n---\nBackend engineer\n---"
    assert request.segments[2] == "**Resume 1 (alice.pdf):**\n---\nAlice knows Python\n---"
    assert request.segments[3] == "**Resume 2 (bob.txt):**\n---\nBob knows Java\n---"
    assert request.file_names == ["alice.pdf", "bob.txt"]
    assert request.resume_count == 2


def test_schema_requires_every_field():
    schema = build_request("jd", RESUMES).response_schema
    assert schema["type"] == "ARRAY"
    item = schema["items"]
    assert set(item["required"]) == set(item["properties"])
    assert len(item["required"]) == 12
    assert item["properties"]["verdict"]["enum"] == ["High", "Medium", "Low"]
    assert item["properties"]["atsAnalysis"]["required"] == ["score", "issues"]


def test_build_is_deterministic():
    assert build_request("jd", RESUMES) == build_request("jd", RESUMES)


def test_returned_schema_is_a_copy():
    first = build_request("jd", RESUMES)
    first.response_schema["items"]["required"].clear()
    assert build_request("jd", RESUMES).response_schema["items"]["required"]


def test_empty_batch_is_rejected():
    with pytest.raises(ValueError):
        build_request("jd", [])

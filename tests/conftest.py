"""Shared test fixtures."""

from __future__ import annotations

import copy
from unittest.mock import AsyncMock, MagicMock

import pytest

from skillgap_radar.clients.llm_client import LLMClient, LLMResponse
from skillgap_radar.models.analysis import AnalysisResult
from skillgap_radar.models.resume import ResumePayload
from skillgap_radar.storage.local_store import LocalStore

SAMPLE_RESPONSE = {
    "matchScore": 62,
    "executiveSummary": (
        "Solid React fundamentals and Redux experience, but short on TypeScript "
        "and automated testing, both critical for this role."
    ),
    "skills": [
        {
            "name": "React",
            "category": "Technical",
            "importance": "Critical",
            "requiredLevel": 4,
            "observedLevel": 3,
            "gap": 1,
            "reasoning": "Three years of React dashboards, no component library work.",
            "evidence": "Built internal dashboards using React and JavaScript.",
        },
        {
            "name": "TypeScript",
            "category": "Technical",
            "importance": "Critical",
            "requiredLevel": 4,
            "observedLevel": 1,
            "gap": 3,
            "reasoning": "Not mentioned anywhere in the resume.",
            "evidence": "Not explicitly found",
        },
        {
            "name": "State Management",
            "category": "Technical",
            "importance": "High",
            "requiredLevel": 3,
            "observedLevel": 4,
            "gap": 0,
            "reasoning": "Managed global state with Redux Toolkit.",
            "evidence": "Managed global state using Redux Toolkit.",
        },
        {
            "name": "Mentoring",
            "category": "Soft Skill",
            "importance": "Medium",
            "requiredLevel": 3,
            "observedLevel": 2,
            "gap": 1,
            "reasoning": "Collaboration is mentioned, mentoring is not.",
            "evidence": "Implied by [Collaboration]",
        },
    ],
    "learningPathway": [
        {
            "action": "Migrate a React side project to TypeScript",
            "priority": "High",
            "timeline": "4 weeks",
            "resource": "https://www.typescriptlang.org/docs/handbook/react.html",
        },
        {
            "action": "Add Jest and Cypress coverage to an existing app",
            "priority": "Medium",
            "timeline": "3 weeks",
            "resource": "Testing JavaScript course",
        },
    ],
}


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Frontend Engineer

Requirements:
- 5+ years of experience with React and TypeScript.
- Experience with unit and integration testing (Jest, Cypress).
- Strong communication skills and ability to mentor juniors.
"""


@pytest.fixture
def sample_resume_text() -> str:
    return """ALEX RIVERA
Frontend Developer

Experience:
- Built internal dashboards using React and JavaScript.
- Managed global state using Redux Toolkit.

Skills:
- JavaScript (ES6+), React, HTML5, CSS3
"""


@pytest.fixture
def sample_response() -> dict:
    """Raw model output (camelCase), deep-copied so tests may mutate it."""
    return copy.deepcopy(SAMPLE_RESPONSE)


@pytest.fixture
def sample_result(sample_response) -> AnalysisResult:
    result = AnalysisResult.model_validate(sample_response)
    result.model_used = "claude-sonnet-4-5-20250929 (Standard)"
    return result


@pytest.fixture
def text_payload(sample_resume_text) -> ResumePayload:
    return ResumePayload(content=sample_resume_text, mime_type="text/plain", is_base64=False)


@pytest.fixture
def pdf_payload() -> ResumePayload:
    return ResumePayload(content="JVBERi0xLjQ=", mime_type="application/pdf", is_base64=True)


@pytest.fixture
def store(tmp_path) -> LocalStore:
    return LocalStore(db_path=tmp_path / "state.db")


@pytest.fixture
def mock_llm_client(sample_response) -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value=sample_response)
    client.get_token_summary = MagicMock(return_value={"input": 100, "output": 50, "calls": []})
    return client

"""Gap Analyst - scores a candidate profile against a job description."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Protocol

from pydantic import ValidationError

from skillgap_radar.clients.llm_client import LLMClient
from skillgap_radar.config import LLMConfig
from skillgap_radar.errors import ConfigurationError, ProviderError
from skillgap_radar.models.analysis import AnalysisResult
from skillgap_radar.models.resume import AnalysisRequest

logger = logging.getLogger(__name__)

API_KEY_ENV = "ANTHROPIC_API_KEY"

MODE_LABELS = {
    "standard": "Standard",
    "deep": "Extended Thinking",
}

_SKILL_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Name of the skill"},
        "category": {"type": "string", "description": "Technical, Soft Skill, Domain, etc."},
        "importance": {"type": "string", "enum": ["Critical", "High", "Medium", "Low"]},
        "requiredLevel": {"type": "integer", "minimum": 1, "maximum": 5,
                          "description": "1-5 scale required by the JD"},
        "observedLevel": {"type": "integer", "minimum": 1, "maximum": 5,
                          "description": "1-5 scale observed in the candidate"},
        "gap": {"type": "integer", "minimum": 0,
                "description": "max(requiredLevel - observedLevel, 0)"},
        "reasoning": {"type": "string",
                      "description": "Justification of the score, referencing specific evidence or lack thereof"},
        "evidence": {"type": "string",
                     "description": "Direct quote from the resume, 'Not explicitly found' or 'Implied by [Skill X]'"},
    },
    "required": ["name", "category", "importance", "requiredLevel", "observedLevel",
                 "gap", "reasoning", "evidence"],
}

_LEARNING_ACTION_SCHEMA = {
    "type": "object",
    "properties": {
        "action": {"type": "string", "description": "Specific action to take"},
        "priority": {"type": "string", "enum": ["High", "Medium", "Low"]},
        "timeline": {"type": "string", "description": "Estimated time to complete"},
        "resource": {"type": "string", "description": "Suggested resource URL"},
    },
    "required": ["action", "priority", "timeline", "resource"],
}

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "matchScore": {"type": "integer", "minimum": 0, "maximum": 100,
                       "description": "Overall match percentage (0-100)"},
        "executiveSummary": {"type": "string",
                             "description": "Summary of the fit: key strengths and critical missing pieces"},
        "skills": {"type": "array", "items": _SKILL_SCHEMA},
        "learningPathway": {"type": "array", "items": _LEARNING_ACTION_SCHEMA},
    },
    "required": ["matchScore", "executiveSummary", "skills", "learningPathway"],
}

SYSTEM_PROMPT = """\
You are an expert Talent Intelligence System acting as a Senior Technical Recruiter and Engineering Manager.
Your goal is to perform a deep semantic gap analysis between a Job Description (JD) and a Candidate Profile.

REASONING INSTRUCTIONS:
1. Analyze context, not just keywords. If a candidate lists "Kubernetes" and "Docker", infer
   "Containerization" even if that word is missing.
2. Evaluate depth. Differentiate familiarity (mentioned once) from proficiency (used across
   multiple projects or years).
3. Detect negative evidence. If a skill is Critical in the JD but absent from the resume, mark it
   as a gap and explain why it matters. Missing critical skills must lower the match score.
4. Scoring standard (1-5):
   - 1: Novice / theory only
   - 2: Basic exposure / junior level
   - 3: Competent / mid-level, works independently
   - 4: Advanced / senior, can lead or architect
   - 5: Expert / principal, deep specialization
5. Gap = Required - Observed. If Observed >= Required, Gap is 0.

OUTPUT INSTRUCTIONS:
- Provide a specific, actionable learning pathway for the gaps.
- Be strict but fair.
- Respond with ONLY a JSON object that conforms exactly to this JSON schema, with no prose:

{schema}"""


class AnalysisProvider(Protocol):
    """Anything that can turn an AnalysisRequest into an AnalysisResult."""

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult: ...


def build_system_prompt() -> str:
    return SYSTEM_PROMPT.format(schema=json.dumps(RESPONSE_SCHEMA, indent=2))


def build_content(request: AnalysisRequest) -> list[dict[str, Any]]:
    """Assemble the user message: JD text, then the résumé as a document or text."""
    blocks: list[dict[str, Any]] = [
        {"type": "text", "text": f"Job Description:\n{request.job_description}"},
    ]
    resume = request.resume
    if resume.is_base64:
        blocks.append({
            "type": "document",
            "source": {
                "type": "base64",
                "media_type": resume.mime_type,
                "data": resume.content,
            },
        })
        blocks.append({"type": "text", "text": "\n\nCandidate Profile (see attached document above)."})
    else:
        blocks.append({"type": "text", "text": f"\n\nCandidate Profile:\n{resume.content}"})
    return blocks


class GapAnalyst:
    """Claude-backed AnalysisProvider.

    The API key is resolved on the first call rather than at construction, so
    the app can start without one and fail only when an analysis is run.
    """

    def __init__(
        self,
        llm: LLMClient | None = None,
        config: LLMConfig | None = None,
        *,
        api_key: str | None = None,
        mode: str | None = None,
    ):
        self.config = config or LLMConfig()
        self.mode = mode or self.config.mode
        if self.mode not in MODE_LABELS:
            raise ValueError(f"Unknown analysis mode: {self.mode!r}")
        self._llm = llm
        self._api_key = api_key

    @property
    def model_label(self) -> str:
        return f"{self.config.model} ({MODE_LABELS[self.mode]})"

    def _get_llm(self) -> LLMClient:
        if self._llm is None:
            api_key = self._api_key if self._api_key is not None else os.environ.get(API_KEY_ENV, "")
            if not api_key or not api_key.strip():
                raise ConfigurationError(
                    f"{API_KEY_ENV} is missing. Set it in the environment, a .env file "
                    "or Streamlit secrets."
                )
            self._llm = LLMClient(
                api_key=api_key.strip(),
                timeout=self.config.timeout,
                max_retries=self.config.max_retries,
            )
        return self._llm

    def token_summary(self) -> dict | None:
        """Token usage since the last call, or None if no client was created."""
        if self._llm is None:
            return None
        return self._llm.get_token_summary()

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """Run one gap analysis and return the validated result."""
        llm = self._get_llm()
        deep = self.mode == "deep"
        data = await llm.generate_json(
            content=build_content(request),
            system=build_system_prompt(),
            model=self.config.model,
            temperature=self.config.temperature,
            max_tokens=self.config.deep_max_tokens if deep else self.config.max_tokens,
            thinking_budget=self.config.thinking_budget if deep else 0,
        )
        data.pop("modelUsed", None)
        data.pop("model_used", None)
        try:
            result = AnalysisResult.model_validate(data)
        except ValidationError as exc:
            logger.error("Model output does not match the analysis schema: %s", exc)
            raise ProviderError(
                f"AI Request Failed: response does not match schema ({exc.error_count()} errors)"
            ) from exc

        result.model_used = self.model_label
        logger.info(
            "Analysis complete: score=%d skills=%d actions=%d",
            result.match_score, len(result.skills), len(result.learning_pathway),
        )
        return result

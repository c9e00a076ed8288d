"""Tests for the gap analysis request builder and provider."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from skillgap_radar.config import LLMConfig
from skillgap_radar.errors import ConfigurationError, ErrorKind, ProviderError
from skillgap_radar.models.analysis import AnalysisResult
from skillgap_radar.models.resume import AnalysisRequest
from skillgap_radar.pipeline.gap_analyst import (
    RESPONSE_SCHEMA,
    GapAnalyst,
    build_content,
    build_system_prompt,
)


@pytest.fixture
def text_request(sample_jd_text, text_payload) -> AnalysisRequest:
    return AnalysisRequest(job_description=sample_jd_text, resume=text_payload)


@pytest.fixture
def pdf_request(sample_jd_text, pdf_payload) -> AnalysisRequest:
    return AnalysisRequest(job_description=sample_jd_text, resume=pdf_payload)


class TestBuildContent:
    def test_text_resume_is_two_text_blocks(self, text_request, sample_jd_text, sample_resume_text):
        blocks = build_content(text_request)
        assert blocks == [
            {"type": "text", "text": f"Job Description:\n{sample_jd_text}"},
            {"type": "text", "text": f"\n\nCandidate Profile:\n{sample_resume_text}"},
        ]

    def test_pdf_resume_is_document_block(self, pdf_request):
        blocks = build_content(pdf_request)
        assert len(blocks) == 3
        assert blocks[0]["text"].startswith("Job Description:\n")
        assert blocks[1] == {
            "type": "document",
            "source": {"type": "base64", "media_type": "application/pdf", "data": "JVBERi0xLjQ="},
        }
        assert blocks[2]["type"] == "text"
        assert "Candidate Profile" in blocks[2]["text"]

    def test_job_description_precedes_resume(self, text_request):
        blocks = build_content(text_request)
        assert "Job Description" in blocks[0]["text"]
        assert "Candidate Profile" in blocks[-1]["text"]


class TestSystemPrompt:
    def test_embeds_response_schema(self):
        prompt = build_system_prompt()
        assert json.dumps(RESPONSE_SCHEMA, indent=2) in prompt
        assert "{schema}" not in prompt

    def test_contains_scoring_rubric(self):
        prompt = build_system_prompt()
        assert "Gap = Required - Observed" in prompt
        assert "5: Expert" in prompt

    def test_schema_requires_all_top_level_fields(self):
        assert set(RESPONSE_SCHEMA["required"]) == {
            "matchScore", "executiveSummary", "skills", "learningPathway",
        }


class TestGapAnalyst:
    async def test_standard_mode_call(self, mock_llm_client, text_request):
        analyst = GapAnalyst(llm=mock_llm_client, config=LLMConfig())
        result = await analyst.analyze(text_request)

        assert isinstance(result, AnalysisResult)
        assert result.match_score == 62
        kwargs = mock_llm_client.generate_json.call_args.kwargs
        assert kwargs["model"] == "claude-sonnet-4-5-20250929"
        assert kwargs["max_tokens"] == 8192
        assert kwargs["thinking_budget"] == 0
        assert kwargs["content"] == build_content(text_request)
        assert kwargs["system"] == build_system_prompt()

    async def test_deep_mode_enables_thinking(self, mock_llm_client, text_request):
        analyst = GapAnalyst(llm=mock_llm_client, mode="deep")
        await analyst.analyze(text_request)

        kwargs = mock_llm_client.generate_json.call_args.kwargs
        assert kwargs["max_tokens"] == 16384
        assert kwargs["thinking_budget"] == 8192

    async def test_model_used_is_labelled(self, mock_llm_client, text_request):
        result = await GapAnalyst(llm=mock_llm_client).analyze(text_request)
        assert result.model_used == "claude-sonnet-4-5-20250929 (Standard)"

    async def test_model_supplied_model_used_is_overwritten(
        self, mock_llm_client, sample_response, text_request
    ):
        sample_response["modelUsed"] = "gpt-imaginary"
        mock_llm_client.generate_json.return_value = sample_response
        result = await GapAnalyst(llm=mock_llm_client, mode="deep").analyze(text_request)
        assert result.model_used == "claude-sonnet-4-5-20250929 (Extended Thinking)"

    async def test_gap_recomputed(self, mock_llm_client, sample_response, text_request):
        sample_response["skills"][1]["gap"] = 0
        mock_llm_client.generate_json.return_value = sample_response
        result = await GapAnalyst(llm=mock_llm_client).analyze(text_request)
        assert result.skills[1].gap == 3

    async def test_missing_field_raises_provider_error(
        self, mock_llm_client, sample_response, text_request
    ):
        del sample_response["skills"]
        mock_llm_client.generate_json.return_value = sample_response
        with pytest.raises(ProviderError, match="does not match schema") as exc_info:
            await GapAnalyst(llm=mock_llm_client).analyze(text_request)
        assert exc_info.value.kind is ErrorKind.PROVIDER

    async def test_provider_error_propagates(self, mock_llm_client, text_request):
        mock_llm_client.generate_json.side_effect = ProviderError("AI Request Failed: timeout")
        with pytest.raises(ProviderError, match="timeout"):
            await GapAnalyst(llm=mock_llm_client).analyze(text_request)

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown analysis mode"):
            GapAnalyst(mode="fast")

    def test_model_label(self):
        config = LLMConfig(model="claude-test")
        assert GapAnalyst(config=config).model_label == "claude-test (Standard)"
        assert GapAnalyst(config=config, mode="deep").model_label == "claude-test (Extended Thinking)"


class TestApiKey:
    async def test_missing_key_raises_configuration_error(self, monkeypatch, text_request):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        analyst = GapAnalyst()
        with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY") as exc_info:
            await analyst.analyze(text_request)
        assert exc_info.value.kind is ErrorKind.CONFIGURATION

    async def test_blank_key_raises_configuration_error(self, text_request):
        with pytest.raises(ConfigurationError):
            await GapAnalyst(api_key="   ").analyze(text_request)

    def test_construction_does_not_require_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        analyst = GapAnalyst()
        assert analyst.token_summary() is None

    def test_client_built_from_environment(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", " sk-test ")
        with patch("skillgap_radar.pipeline.gap_analyst.LLMClient") as mock_cls:
            analyst = GapAnalyst(config=LLMConfig(timeout=30))
            analyst._get_llm()
        mock_cls.assert_called_once_with(api_key="sk-test", timeout=30, max_retries=0)

    def test_explicit_key_wins(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "from-env")
        with patch("skillgap_radar.pipeline.gap_analyst.LLMClient") as mock_cls:
            GapAnalyst(api_key="explicit")._get_llm()
        assert mock_cls.call_args.kwargs["api_key"] == "explicit"

    def test_token_summary_delegates(self, mock_llm_client):
        analyst = GapAnalyst(llm=mock_llm_client)
        assert analyst.token_summary() == {"input": 100, "output": 50, "calls": []}

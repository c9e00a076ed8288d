"""Pydantic models for the analysis request and résumé payload."""

from __future__ import annotations

from pydantic import model_validator

from skillgap_radar.models.analysis import CamelModel

PDF_MIME_TYPE = "application/pdf"
TEXT_MIME_TYPE = "text/plain"
BINARY_MIME_TYPES = frozenset({PDF_MIME_TYPE})


class ResumePayload(CamelModel):
    content: str  # plain text, or base64 when is_base64
    mime_type: str
    is_base64: bool

    @model_validator(mode="after")
    def _check_encoding(self) -> ResumePayload:
        binary = self.mime_type in BINARY_MIME_TYPES
        if binary != self.is_base64:
            raise ValueError(
                f"is_base64 must be {binary} for mime type {self.mime_type!r}"
            )
        return self


class AnalysisRequest(CamelModel):
    job_description: str
    resume: ResumePayload

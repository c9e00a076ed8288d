"""Error taxonomy shared by ingestion, analysis and persistence."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    INGESTION = "ingestion"
    PROVIDER = "provider"
    MODEL_UNAVAILABLE = "model_unavailable"
    PERSISTENCE = "persistence"


class SkillGapError(Exception):
    """Base class for failures surfaced to the user.

    Every subclass carries an ``ErrorKind`` so callers can branch on the
    category without matching message strings.
    """

    kind: ErrorKind = ErrorKind.PROVIDER


class ConfigurationError(SkillGapError):
    """Raised when a required setting (the API key) is missing."""

    kind = ErrorKind.CONFIGURATION


class IngestionError(SkillGapError):
    """Raised when an uploaded résumé cannot be turned into a payload."""

    kind = ErrorKind.INGESTION


class ProviderError(SkillGapError):
    """Raised for transport failures and empty or malformed model output."""

    kind = ErrorKind.PROVIDER


class ModelUnavailableError(ProviderError):
    """Raised when the provider rejects the configured model identifier."""

    kind = ErrorKind.MODEL_UNAVAILABLE

    def __init__(self, model: str):
        super().__init__(f"Model {model} not found. Please check API availability.")
        self.model = model


class PersistenceError(SkillGapError):
    """Raised when cached state cannot be written or read back."""

    kind = ErrorKind.PERSISTENCE

"""Data models for the skill gap analysis."""

from skillgap_radar.models.analysis import AnalysisResult, LearningAction, Skill
from skillgap_radar.models.resume import AnalysisRequest, ResumePayload

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "LearningAction",
    "ResumePayload",
    "Skill",
]

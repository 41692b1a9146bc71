from enum import Enum
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QualitativeLikelihood(str, Enum):
    HIGHLY_UNLIKELY = "Highly Unlikely"
    UNLIKELY = "Unlikely"
    INCONCLUSIVE = "Inconclusive"
    POSSIBLE = "Possible"
    LIKELY = "Likely"


class FollowUpAnswers(BaseModel):
    """The seven 1-5 follow-up scores, one per behavioral dimension."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    emotional_distance: int = Field(..., strict=True, ge=1, le=5, alias="emotionalDistance")
    technology_privacy: int = Field(..., strict=True, ge=1, le=5, alias="technologyPrivacy")
    schedule_changes: int = Field(..., strict=True, ge=1, le=5, alias="scheduleChanges")
    appearance_changes: int = Field(..., strict=True, ge=1, le=5, alias="appearanceChanges")
    intimacy_changes: int = Field(..., strict=True, ge=1, le=5, alias="intimacyChanges")
    defensiveness: int = Field(..., strict=True, ge=1, le=5)
    interest_in_you: int = Field(..., strict=True, ge=1, le=5, alias="interestInYou")

    def as_list(self) -> List[int]:
        return [
            self.emotional_distance,
            self.technology_privacy,
            self.schedule_changes,
            self.appearance_changes,
            self.intimacy_changes,
            self.defensiveness,
            self.interest_in_you,
        ]


class FormData(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    user_age: Union[int, str] = Field(..., alias="userAge")
    partner_age: Union[int, str] = Field(..., alias="partnerAge")
    relationship_duration: Union[int, str] = Field(..., alias="relationshipDuration")
    concerns: str
    user_email: str = Field(..., alias="userEmail")

    @field_validator("concerns", "user_email")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    def extra_context(self) -> dict:
        """Any additional form fields submitted beyond the known ones."""
        return dict(self.model_extra or {})


class RiskMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    average_score: float = Field(..., ge=1.0, le=5.0)
    high_concern_count: int = Field(..., ge=0, le=7)
    moderate_concern_count: int = Field(..., ge=0, le=7)
    concern_level: int = Field(..., ge=1, le=9)
    health_score: int = Field(..., ge=1, le=10)
    qualitative_likelihood: QualitativeLikelihood


class NarrativeSections(BaseModel):
    model_config = ConfigDict(frozen=True)

    behavioral_analysis: str
    context_analysis: str
    recommended_actions: str
    communication_strategies: str

    @field_validator("*")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("section text must not be empty")
        return v


class AssessmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    average_score: float
    high_concern_count: int
    moderate_concern_count: int
    concern_level: int
    health_score: int
    qualitative_likelihood: QualitativeLikelihood
    behavioral_analysis: str
    context_analysis: str
    recommended_actions: str
    communication_strategies: str

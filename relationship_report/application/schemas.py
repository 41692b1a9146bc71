from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from relationship_report.domain.models import AssessmentResult


class AnalysisPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    qualitative_likelihood: Optional[str] = Field(None, alias="qualitativeLikelihood")
    concern_level: str = Field(..., alias="concernLevel")  # "<n>/10"
    health_score: str = Field(..., alias="healthScore")  # "<n>/10"
    behavioral_analysis: str = Field(..., alias="behavioralAnalysis")
    context_analysis: str = Field(..., alias="contextAnalysis")
    recommended_actions: str = Field(..., alias="recommendedActions")
    communication_strategies: str = Field(..., alias="communicationStrategies")

    @classmethod
    def from_result(cls, result: AssessmentResult) -> "AnalysisPayload":
        return cls(
            qualitative_likelihood=result.qualitative_likelihood.value,
            concern_level=f"{result.concern_level}/10",
            health_score=f"{result.health_score}/10",
            behavioral_analysis=result.behavioral_analysis,
            context_analysis=result.context_analysis,
            recommended_actions=result.recommended_actions,
            communication_strategies=result.communication_strategies,
        )


class AssessmentResponse(BaseModel):
    success: bool
    status_code: int = 200
    category: Optional[str] = None
    analysis: Optional[AnalysisPayload] = None
    error: Optional[str] = None
    details: Optional[str] = None

    def to_dict(self) -> dict:
        """Wire representation; status_code and category stay on the server side."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"status_code", "category"})


class NotificationPayload(BaseModel):
    recipient: str
    order_id: str
    concern_level: int
    health_score: int
    qualitative_likelihood: str
    behavioral_analysis: str
    context_analysis: str
    recommended_actions: str
    communication_strategies: str

    @classmethod
    def from_result(cls, recipient: str, result: AssessmentResult) -> "NotificationPayload":
        return cls(
            recipient=recipient,
            order_id=result.order_id,
            concern_level=result.concern_level,
            health_score=result.health_score,
            qualitative_likelihood=result.qualitative_likelihood.value,
            behavioral_analysis=result.behavioral_analysis,
            context_analysis=result.context_analysis,
            recommended_actions=result.recommended_actions,
            communication_strategies=result.communication_strategies,
        )

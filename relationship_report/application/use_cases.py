import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from relationship_report.application.errors import (
    AssessmentError,
    GenerationError,
    SubmissionValidationError,
)
from relationship_report.application.ports import NotifierPort, TextGeneratorPort
from relationship_report.application.schemas import (
    AnalysisPayload,
    AssessmentResponse,
    NotificationPayload,
)
from relationship_report.domain.models import (
    AssessmentResult,
    FollowUpAnswers,
    FormData,
    NarrativeSections,
    RiskMetrics,
)
from relationship_report.domain.narrative import SECTION_HEADERS, extract_sections
from relationship_report.domain.rules import DIMENSION_LABELS, score
from relationship_report.infrastructure.config import Settings
from relationship_report.infrastructure.validators import validate_email


logger = logging.getLogger(__name__)


COUNSELOR_ROLE = (
    "You are a compassionate relationship counselor providing a confidential assessment. "
    "You never accuse anyone or claim certainty about infidelity. Behavior changes have many "
    "possible explanations, and you always encourage honest, calm communication."
)


def build_prompt(form: FormData, answers: FollowUpAnswers, metrics: RiskMetrics) -> str:
    lines = [
        "Analyze this relationship situation with nuance, empathy, and professional insight.",
        "",
        "BACKGROUND:",
        f"- User age: {form.user_age}",
        f"- Partner age: {form.partner_age}",
        f"- Relationship duration: {form.relationship_duration}",
        f"- Concerns in their own words: {form.concerns}",
    ]
    for key, value in form.extra_context().items():
        lines.append(f"- {key}: {value}")

    lines += ["", "BEHAVIOR CHANGE SCORES (1 = no change, 5 = significant change):"]
    for field, label in DIMENSION_LABELS.items():
        lines.append(f"- {label}: {getattr(answers, field)}/5")

    lines += [
        "",
        "DERIVED METRICS:",
        f"- Average score: {metrics.average_score:.2f}",
        f"- High concern areas (4-5): {metrics.high_concern_count}",
        f"- Moderate concern areas (3): {metrics.moderate_concern_count}",
        f"- Concern level: {metrics.concern_level}/10",
        f"- Relationship health score: {metrics.health_score}/10",
        f"- Overall likelihood assessment: {metrics.qualitative_likelihood.value}",
        "",
        "Write your report in exactly four sections, in this order, each starting with its header "
        "on its own line exactly as written here:",
    ]
    for header in SECTION_HEADERS.values():
        lines.append(f"{header}:")
    lines += [
        "",
        "Write plain paragraphs only. Do NOT use markdown, bold or italic markers, headings, "
        "bullet points or numbered lists. Do not add any other headers.",
    ]
    return "\n".join(lines)


def assemble(order_id: str, metrics: RiskMetrics, sections: NarrativeSections) -> AssessmentResult:
    return AssessmentResult(order_id=order_id, **metrics.model_dump(), **sections.model_dump())


class RelationshipAssessmentUseCase:
    def __init__(
        self,
        generator: TextGeneratorPort,
        settings: Settings,
        notifier: Optional[NotifierPort] = None,
    ):
        self.generator = generator
        self.settings = settings
        self.notifier = notifier

    def assess(self, order_id: str, form: FormData, answers: FollowUpAnswers) -> AssessmentResult:
        metrics = score(answers)
        logger.info(
            "Order %s: average %.2f, concern %s/10, health %s/10, likelihood %s",
            order_id,
            metrics.average_score,
            metrics.concern_level,
            metrics.health_score,
            metrics.qualitative_likelihood.value,
        )

        prompt = build_prompt(form, answers, metrics)
        raw = self._generate(prompt)
        sections = extract_sections(raw)
        result = assemble(order_id, metrics, sections)

        self._notify(form.user_email, result)
        return result

    def _generate(self, prompt: str) -> str:
        try:
            raw = self.generator.generate(
                prompt,
                max_output_tokens=self.settings.max_output_tokens,
                temperature=self.settings.temperature,
                system_prompt=COUNSELOR_ROLE,
            )
        except AssessmentError:
            raise
        except Exception as e:
            raise GenerationError("Failed to generate analysis", details=str(e)) from e

        if not raw or not raw.strip():
            raise GenerationError("Failed to generate analysis", details="Empty response from text generator")
        return raw

    def _notify(self, recipient: str, result: AssessmentResult) -> None:
        if self.notifier is None:
            return
        is_valid, error = validate_email(recipient)
        if not is_valid:
            logger.warning("Order %s: not emailing report (%s)", result.order_id, error)
            return
        try:
            payload = NotificationPayload.from_result(recipient.strip(), result)
            if not self.notifier.notify(payload):
                logger.warning("Order %s: notifier reported failure", result.order_id)
        except Exception as e:
            logger.exception("Order %s: failed to send report email: %s", result.order_id, e)


def _parse_submission(body: Any):
    if not isinstance(body, Mapping):
        raise SubmissionValidationError("Invalid request body")

    order_id = body.get("orderId")
    if order_id is None or (isinstance(order_id, str) and not order_id.strip()):
        raise SubmissionValidationError("Missing orderId")
    if not isinstance(order_id, str):
        raise SubmissionValidationError("Invalid orderId", details="orderId must be a string")
    if not body.get("formData"):
        raise SubmissionValidationError("Missing formData")
    if not body.get("followUpAnswers"):
        raise SubmissionValidationError("Missing followUpAnswers")

    try:
        form = FormData(**body["formData"])
    except (TypeError, ValidationError) as e:
        raise SubmissionValidationError("Invalid formData", details=str(e)) from e
    try:
        answers = FollowUpAnswers(**body["followUpAnswers"])
    except (TypeError, ValidationError) as e:
        raise SubmissionValidationError("Invalid followUpAnswers", details=str(e)) from e
    return order_id.strip(), form, answers


def handle_submission(body: Any, use_case: RelationshipAssessmentUseCase) -> AssessmentResponse:
    """Run one submission through the pipeline and shape the outcome as a response."""
    try:
        order_id, form, answers = _parse_submission(body)
        result = use_case.assess(order_id, form, answers)
    except AssessmentError as e:
        if e.status_code >= 500:
            logger.error("Assessment failed (%s): %s %s", e.category, e.message, e.details or "")
        else:
            logger.info("Rejected submission: %s", e.message)
        return AssessmentResponse(
            success=False,
            status_code=e.status_code,
            category=e.category,
            error=e.message,
            details=e.details,
        )

    return AssessmentResponse(success=True, analysis=AnalysisPayload.from_result(result))

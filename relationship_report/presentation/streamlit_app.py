import logging
import os
import uuid

import streamlit as st

from relationship_report.application.schemas import AssessmentResponse
from relationship_report.application.use_cases import RelationshipAssessmentUseCase, handle_submission
from relationship_report.domain.rules import DIMENSION_LABELS
from relationship_report.infrastructure.config import Settings
from relationship_report.infrastructure.llm.mistral_client import MistralTextGenerator
from relationship_report.infrastructure.notify.email_notifier import SmtpEmailNotifier
from relationship_report.infrastructure.notify.log_notifier import LogNotifier
from relationship_report.infrastructure.validators import validate_age, validate_email


logger = logging.getLogger(__name__)


DISCLAIMER = (
    "ℹ️ **DISCLAIMER:** This assessment is NOT professional counseling and NOT proof of anything. "
    "Behavior changes have many possible explanations. "
    "Consider talking with a licensed relationship counselor."
)

# Wire names expected by handle_submission, keyed by the answer field they fill.
ANSWER_WIRE_NAMES = {
    "emotional_distance": "emotionalDistance",
    "technology_privacy": "technologyPrivacy",
    "schedule_changes": "scheduleChanges",
    "appearance_changes": "appearanceChanges",
    "intimacy_changes": "intimacyChanges",
    "defensiveness": "defensiveness",
    "interest_in_you": "interestInYou",
}


def _require_mistral_key(settings: Settings) -> bool:
    if not settings.mistral_api_key:
        st.error(
            "❌ **Mistral API Key Missing**\n\n"
            "Add `MISTRAL_API_KEY` to `.streamlit/secrets.toml` or as an environment variable.\n\n"
            "See README for setup instructions."
        )
        return False
    return True


def build_use_case(settings: Settings) -> RelationshipAssessmentUseCase:
    notifier = SmtpEmailNotifier(settings) if settings.email_configured else LogNotifier()
    return RelationshipAssessmentUseCase(
        generator=MistralTextGenerator(settings),
        settings=settings,
        notifier=notifier,
    )


def _form_errors(user_age, partner_age, email: str, concerns: str) -> list:
    errors = []
    for value, name in ((user_age, "Your age"), (partner_age, "Partner's age")):
        ok, error = validate_age(value, name)
        if not ok:
            errors.append(error)
    ok, error = validate_email(email)
    if not ok:
        errors.append(error)
    if not concerns.strip():
        errors.append("Please describe your concerns")
    return errors


def format_response_for_display(response: AssessmentResponse) -> str:
    """Format a successful response as markdown for the results page."""
    analysis = response.analysis
    lines = ["# 📋 Your Assessment\n"]
    if analysis.qualitative_likelihood:
        lines.append(f"**Overall assessment:** {analysis.qualitative_likelihood}")
    lines.append(f"**Concern level:** {analysis.concern_level}")
    lines.append(f"**Relationship health:** {analysis.health_score}\n")

    lines.append("## 🔍 Behavioral Analysis")
    lines.append(analysis.behavioral_analysis + "\n")
    lines.append("## 🧭 Context Analysis")
    lines.append(analysis.context_analysis + "\n")
    lines.append("## 📝 Recommended Actions")
    lines.append(analysis.recommended_actions + "\n")
    lines.append("## 💬 Communication Strategies")
    lines.append(analysis.communication_strategies + "\n")

    lines.append("---")
    lines.append("⚠️ **Reminder:** This is NOT professional counseling. A licensed counselor can help you both.")
    return "\n".join(lines)


def main():
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

    st.set_page_config(
        page_title="Relationship Assessment",
        page_icon="💬",
        layout="centered",
    )

    settings = Settings.load()
    if not _require_mistral_key(settings):
        st.stop()

    if "use_case" not in st.session_state:
        st.session_state.use_case = build_use_case(settings)

    st.markdown("# 💬 Relationship Assessment")
    st.info(DISCLAIMER)

    with st.form("assessment_form"):
        col1, col2 = st.columns(2)
        with col1:
            user_age = st.text_input("Your age")
        with col2:
            partner_age = st.text_input("Partner's age")
        duration = st.selectbox(
            "How long have you been together?",
            ["Less than 1 year", "1-3 years", "3-5 years", "5-10 years", "More than 10 years"],
        )
        concerns = st.text_area("What has been worrying you?")
        email = st.text_input("Email for your report", placeholder="your.email@example.com")

        st.markdown("### How much has each of these changed? (1 = not at all, 5 = a lot)")
        answers = {}
        for field, label in DIMENSION_LABELS.items():
            answers[ANSWER_WIRE_NAMES[field]] = st.slider(label, min_value=1, max_value=5, value=1)

        submitted = st.form_submit_button("Get my assessment", use_container_width=True)

    if not submitted:
        return

    errors = _form_errors(user_age, partner_age, email, concerns)
    if errors:
        for error in errors:
            st.error(f"❌ {error}")
        return

    body = {
        "orderId": uuid.uuid4().hex[:12],
        "formData": {
            "userAge": user_age.strip(),
            "partnerAge": partner_age.strip(),
            "relationshipDuration": duration,
            "concerns": concerns,
            "userEmail": email,
        },
        "followUpAnswers": answers,
    }

    with st.spinner("🔬 Preparing your assessment..."):
        try:
            response = handle_submission(body, st.session_state.use_case)
        except Exception as e:
            logger.exception("Assessment failed: %s", e)
            st.error(f"❌ **Error during analysis:** {str(e)}\n\nPlease try again.")
            return

    if not response.success:
        st.error(f"❌ **{response.error}**" + (f"\n\n{response.details}" if response.details else ""))
        return

    st.markdown(format_response_for_display(response))


if __name__ == "__main__":
    main()

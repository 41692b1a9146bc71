"""Rendering of the emailed report (HTML body plus plain-text alternative)."""
from html import escape
from typing import List, Tuple

from relationship_report.application.schemas import NotificationPayload


SECTION_TITLES: List[Tuple[str, str]] = [
    ("behavioral_analysis", "Behavioral Analysis"),
    ("context_analysis", "Context Analysis"),
    ("recommended_actions", "Recommended Actions"),
    ("communication_strategies", "Communication Strategies"),
]

DISCLAIMER = (
    "This assessment is for informational purposes only and is not professional "
    "counseling or proof of any behavior. Consider speaking with a licensed "
    "relationship counselor."
)


def _paragraphs(text: str) -> List[str]:
    return [p.strip() for p in text.split("\n\n") if p.strip()]


def render_report_html(payload: NotificationPayload) -> str:
    parts = [
        "<html><body style=\"font-family: Arial, sans-serif; color: #333; max-width: 640px;\">",
        "<h1>Your Relationship Assessment</h1>",
        f"<p>Order reference: <strong>{escape(payload.order_id)}</strong></p>",
        "<table style=\"border-collapse: collapse; margin-bottom: 16px;\">",
        f"<tr><td>Overall assessment</td><td><strong>{escape(payload.qualitative_likelihood)}</strong></td></tr>",
        f"<tr><td>Concern level</td><td><strong>{payload.concern_level}/10</strong></td></tr>",
        f"<tr><td>Relationship health</td><td><strong>{payload.health_score}/10</strong></td></tr>",
        "</table>",
    ]
    for field, title in SECTION_TITLES:
        parts.append(f"<h2>{title}</h2>")
        for paragraph in _paragraphs(getattr(payload, field)):
            parts.append("<p>" + escape(paragraph).replace("\n", "<br>") + "</p>")
    parts.append(f"<p style=\"font-size: 12px; color: #777;\">{escape(DISCLAIMER)}</p>")
    parts.append("</body></html>")
    return "\n".join(parts)


def render_report_text(payload: NotificationPayload) -> str:
    lines = [
        "Your Relationship Assessment",
        f"Order reference: {payload.order_id}",
        "",
        f"Overall assessment: {payload.qualitative_likelihood}",
        f"Concern level: {payload.concern_level}/10",
        f"Relationship health: {payload.health_score}/10",
    ]
    for field, title in SECTION_TITLES:
        lines += ["", title.upper(), getattr(payload, field)]
    lines += ["", DISCLAIMER]
    return "\n".join(lines)

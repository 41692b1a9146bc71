"""Tests for report email rendering and delivery."""
from unittest.mock import MagicMock, patch

import pytest

from relationship_report.application.schemas import NotificationPayload
from relationship_report.infrastructure.config import Settings
from relationship_report.infrastructure.notify.email_notifier import SmtpEmailNotifier
from relationship_report.infrastructure.notify.html_report import render_report_html, render_report_text
from relationship_report.infrastructure.notify.log_notifier import LogNotifier


@pytest.fixture
def payload():
    return NotificationPayload(
        recipient="someone@example.com",
        order_id="ORD-7",
        concern_level=5,
        health_score=6,
        qualitative_likelihood="Inconclusive",
        behavioral_analysis="First paragraph.\n\nSecond <paragraph>.",
        context_analysis="Context text.",
        recommended_actions="Talk calmly.",
        communication_strategies="Listen & reflect.",
    )


@pytest.fixture
def smtp_settings():
    return Settings(
        smtp_host="smtp.example.com",
        smtp_port=2525,
        smtp_username="mailer",
        smtp_password="secret",
        mail_from="reports@example.com",
        report_bcc="archive@example.com",
    )


class TestRenderReport:
    """HTML and text bodies."""

    def test_html_contains_scores_and_sections(self, payload):
        html = render_report_html(payload)
        assert "ORD-7" in html
        assert "5/10" in html
        assert "6/10" in html
        assert "Inconclusive" in html
        assert "<h2>Behavioral Analysis</h2>" in html
        assert "<h2>Communication Strategies</h2>" in html
        assert "<p>First paragraph.</p>" in html

    def test_html_escapes_generated_text(self, payload):
        html = render_report_html(payload)
        assert "Second &lt;paragraph&gt;." in html
        assert "Listen &amp; reflect." in html
        assert "<paragraph>" not in html

    def test_text_body(self, payload):
        text = render_report_text(payload)
        assert "Concern level: 5/10" in text
        assert "RECOMMENDED ACTIONS\nTalk calmly." in text


class TestSmtpEmailNotifier:
    """SMTP delivery."""

    def test_build_message(self, payload, smtp_settings):
        msg = SmtpEmailNotifier(smtp_settings).build_message(payload)
        assert "ORD-7" in msg["Subject"]
        assert msg["To"] == "someone@example.com"
        assert msg["From"] == "reports@example.com"
        assert msg["Bcc"] == "archive@example.com"
        assert msg.is_multipart()
        html_part = msg.get_body(preferencelist=("html",))
        assert "Behavioral Analysis" in html_part.get_content()

    @patch("relationship_report.infrastructure.notify.email_notifier.smtplib.SMTP")
    def test_notify_sends(self, mock_smtp, payload, smtp_settings):
        server = MagicMock()
        mock_smtp.return_value.__enter__.return_value = server

        assert SmtpEmailNotifier(smtp_settings).notify(payload) is True

        mock_smtp.assert_called_once_with("smtp.example.com", 2525, timeout=15)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "secret")
        server.send_message.assert_called_once()

    @patch("relationship_report.infrastructure.notify.email_notifier.smtplib.SMTP")
    def test_notify_without_configuration(self, mock_smtp, payload):
        assert SmtpEmailNotifier(Settings()).notify(payload) is False
        mock_smtp.assert_not_called()

    @patch("relationship_report.infrastructure.notify.email_notifier.smtplib.SMTP")
    def test_transport_errors_propagate(self, mock_smtp, payload, smtp_settings):
        mock_smtp.side_effect = OSError("connection refused")
        with pytest.raises(OSError):
            SmtpEmailNotifier(smtp_settings).notify(payload)


def test_log_notifier(payload):
    assert LogNotifier().notify(payload) is True

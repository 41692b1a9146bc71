import logging
import smtplib
from email.message import EmailMessage

from relationship_report.application.ports import NotifierPort
from relationship_report.application.schemas import NotificationPayload
from relationship_report.infrastructure.config import Settings
from relationship_report.infrastructure.notify.html_report import render_report_html, render_report_text


logger = logging.getLogger(__name__)


class SmtpEmailNotifier(NotifierPort):
    def __init__(self, settings: Settings, timeout: int = 15):
        self.settings = settings
        self.timeout = timeout

    def build_message(self, payload: NotificationPayload) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = f"Your Relationship Assessment Report (Order {payload.order_id})"
        msg["From"] = self.settings.mail_from
        msg["To"] = payload.recipient
        if self.settings.report_bcc:
            msg["Bcc"] = self.settings.report_bcc
        msg.set_content(render_report_text(payload))
        msg.add_alternative(render_report_html(payload), subtype="html")
        return msg

    def notify(self, payload: NotificationPayload) -> bool:
        if not self.settings.email_configured:
            logger.warning("SMTP not configured; report for order %s not emailed.", payload.order_id)
            return False

        msg = self.build_message(payload)
        with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=self.timeout) as smtp:
            if self.settings.smtp_use_tls:
                smtp.starttls()
            if self.settings.smtp_username and self.settings.smtp_password:
                smtp.login(self.settings.smtp_username, self.settings.smtp_password)
            smtp.send_message(msg)
        logger.info("Report for order %s emailed to %s", payload.order_id, payload.recipient)
        return True

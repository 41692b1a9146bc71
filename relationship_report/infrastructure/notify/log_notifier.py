import logging

from relationship_report.application.ports import NotifierPort
from relationship_report.application.schemas import NotificationPayload


logger = logging.getLogger(__name__)


class LogNotifier(NotifierPort):
    """Used when no mail server is configured; records what would have been sent."""

    def notify(self, payload: NotificationPayload) -> bool:
        logger.info(
            "Email disabled; report for order %s (concern %s/10, health %s/10) not sent to %s",
            payload.order_id,
            payload.concern_level,
            payload.health_score,
            payload.recipient,
        )
        return True

import os
import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict

try:
    import streamlit as st  # type: ignore
    _HAS_STREAMLIT = True
except Exception:
    _HAS_STREAMLIT = False

logger = logging.getLogger(__name__)


def get_secret(name: str, default: str | None = None) -> str | None:
    # Prefer Streamlit secrets if available
    if _HAS_STREAMLIT:
        try:
            if name in st.secrets:
                return str(st.secrets.get(name))
        except Exception:
            # No secrets.toml outside a Streamlit run
            logger.debug("Streamlit secrets unavailable for %s", name)
    # Fallback to environment variables
    return os.environ.get(name, default)


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Everything the pipeline needs from its environment, read once at startup."""

    model_config = ConfigDict(frozen=True)

    mistral_api_key: Optional[str] = None
    mistral_model: str = "mistral-large-latest"
    max_output_tokens: int = 2000
    temperature: float = 0.7

    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    mail_from: Optional[str] = None
    report_bcc: Optional[str] = None

    @property
    def email_configured(self) -> bool:
        return bool(self.smtp_host and self.mail_from)

    @classmethod
    def load(cls) -> "Settings":
        return cls(
            mistral_api_key=get_secret("MISTRAL_API_KEY"),
            mistral_model=get_secret("MISTRAL_MODEL", "mistral-large-latest") or "mistral-large-latest",
            max_output_tokens=int(get_secret("MAX_OUTPUT_TOKENS", "2000") or 2000),
            temperature=float(get_secret("TEMPERATURE", "0.7") or 0.7),
            smtp_host=get_secret("SMTP_HOST"),
            smtp_port=int(get_secret("SMTP_PORT", "587") or 587),
            smtp_username=get_secret("SMTP_USERNAME"),
            smtp_password=get_secret("SMTP_PASSWORD"),
            smtp_use_tls=_as_bool(get_secret("SMTP_USE_TLS"), True),
            mail_from=get_secret("MAIL_FROM"),
            report_bcc=get_secret("REPORT_BCC"),
        )

"""Failures that end an assessment request without a report."""
from typing import Optional


class AssessmentError(Exception):
    """Base class; carries a stable category and a human readable detail."""

    category = "assessment_error"
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class SubmissionValidationError(AssessmentError):
    """Raised when a required part of the submission is absent or malformed."""

    category = "validation_error"
    status_code = 400


class ConfigurationError(AssessmentError):
    """Raised when the server is missing credentials it needs."""

    category = "configuration_error"


class GenerationError(AssessmentError):
    """Raised when the text generation service fails or returns nothing usable."""

    category = "generation_error"

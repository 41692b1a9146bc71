"""Field validation for submitted questionnaire data."""
import re
from typing import Tuple


def validate_email(email: str) -> Tuple[bool, str]:
    """
    Validate email format before a report is sent to it.

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not email or not email.strip():
        return False, "Email is required"

    email = email.strip().lower()

    # Basic email regex pattern
    email_pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'

    if not re.match(email_pattern, email):
        return False, "Invalid email format"

    if len(email) > 254:  # RFC 5321
        return False, "Email is too long"

    local_part = email.rsplit('@', 1)[0]

    if len(local_part) > 64:  # RFC 5321
        return False, "Email local part is too long"

    if '..' in email:
        return False, "Email cannot contain consecutive dots"

    if local_part.startswith('.') or local_part.endswith('.'):
        return False, "Email local part cannot start or end with a dot"

    return True, ""


def validate_age(value, field_name: str = "Age") -> Tuple[bool, str]:
    """
    Validate an age as submitted by the questionnaire form.

    Accepts ints or numeric strings between 13 and 120.
    """
    if value is None or str(value).strip() == "":
        return False, f"{field_name} is required"

    try:
        age = int(str(value).strip())
    except ValueError:
        return False, f"{field_name} must be a whole number"

    if age < 13 or age > 120:
        return False, f"{field_name} must be between 13 and 120"

    return True, ""

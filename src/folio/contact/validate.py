"""Contact form schema and validation"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError

from folio.errors import ContactValidationError


class ContactSubmission(BaseModel):
    """A single contact form post; request-scoped, never stored."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name:    str = Field(min_length=1, max_length=200)
    email:   EmailStr
    message: str = Field(min_length=10, max_length=5000)
    website: Optional[str] = None                               # honeypot, hidden from humans
    recaptcha_token: Optional[str] = Field(default=None, alias="recaptchaToken")


LABELS = {
    "name": "Name",
    "email": "Email",
    "message": "Message",
    "website": "Website",
    "recaptchaToken": "reCAPTCHA token",
    "recaptcha_token": "reCAPTCHA token",
}


def _message(error: dict[str, Any]) -> tuple[str, Optional[str]]:
    """Human-readable message and field name for one pydantic error."""
    field = str(error["loc"][0]) if error.get("loc") else None
    label = LABELS.get(field, field or "Input")
    kind = error.get("type")
    ctx = error.get("ctx") or {}

    if field == "email" and kind not in ("missing", "string_type"):
        return "Invalid email address", field
    if kind == "missing":
        return f"{label} is required", field
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{label} is required", field
        return f"{label} must be at least {ctx.get('min_length')} characters", field
    if kind == "string_too_long":
        return f"{label} must be at most {ctx.get('max_length')} characters", field
    if kind == "string_type":
        return f"{label} must be a string", field
    return f"{label}: {error.get('msg', 'invalid value')}", field


def validate(raw: Any) -> ContactSubmission:
    """Validate raw request data; raises ContactValidationError for the first violated field."""
    if not isinstance(raw, dict):
        raise ContactValidationError("Invalid request body")
    try:
        return ContactSubmission.model_validate(raw)
    except ValidationError as e:
        message, field = _message(e.errors()[0])
        raise ContactValidationError(message, field) from e


def is_honeypot(submission: ContactSubmission) -> bool:
    """True when the hidden field was filled in, which only bots do."""
    return bool(submission.website)

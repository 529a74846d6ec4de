"""Contact submission pipeline: validate -> honeypot -> verify -> dispatch decision"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from folio.config import Settings
from folio.contact.recaptcha import VerificationResult, verify
from folio.contact.validate import ContactSubmission, is_honeypot, validate
from folio.errors import ContactValidationError, TransientUpstreamFailure, VerificationFailure


logger = logging.getLogger(__name__)

GENERIC_ERROR = "Bad request"

Verifier = Callable[[Optional[str], Optional[str], Settings], VerificationResult]


@dataclass
class ContactOutcome:
    """HTTP-shaped result; dispatch is True only when notifications should be sent."""
    status:     int
    body:       Union[dict[str, Any], str]
    submission: Optional[ContactSubmission] = None
    dispatch:   bool = False


def handle_submission(
    raw: Any,
    client_ip: Optional[str],
    settings: Settings,
    verifier: Verifier = None,
    ) -> ContactOutcome:
    """Run a contact request through validation and bot checks.

    A filled honeypot is answered with a plain "ok" and skips verification and
    dispatch. Verifier outages are logged and reported as a generic failure.
    """
    verifier = verifier or verify
    try:
        submission = validate(raw)
    except ContactValidationError as e:
        return ContactOutcome(400, {"ok": False, "error": e.message})

    if is_honeypot(submission):
        logger.info("Honeypot triggered; dropping submission")
        return ContactOutcome(200, "ok", submission)

    try:
        verifier(submission.recaptcha_token, client_ip, settings).raise_for_failure()
    except VerificationFailure as e:
        return ContactOutcome(400, {"ok": False, "error": "recaptcha_failed", "reason": e.reason}, submission)
    except TransientUpstreamFailure as e:
        logger.error("Bot verification unavailable: %s", e)
        return ContactOutcome(400, {"ok": False, "error": GENERIC_ERROR}, submission)
    return ContactOutcome(200, {"ok": True}, submission, dispatch=True)

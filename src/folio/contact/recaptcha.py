"""Bot-score verification against the reCAPTCHA v3 siteverify endpoint"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import requests

from folio.config import Settings
from folio.errors import TransientUpstreamFailure, VerificationFailure


logger = logging.getLogger(__name__)

VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"

REASON_NOT_CONFIGURED = "recaptcha_not_configured"
REASON_MISSING_TOKEN = "missing_token"
REASON_OK = "ok"
REASON_FAILED = "low_score_or_failed"


@dataclass(frozen=True)
class VerificationResult:
    ok:     bool
    reason: str
    score:  Optional[float] = None

    def raise_for_failure(self) -> None:
        if not self.ok:
            raise VerificationFailure(self.reason, self.score)


def verify(
    token: Optional[str],
    client_ip: Optional[str],
    settings: Settings,
    session: requests.Session = None,
    ) -> VerificationResult:
    """Check a client token; verification is skipped when no secret is configured.

    Network and decoding failures raise TransientUpstreamFailure; there is no retry.
    """
    secret = settings.recaptcha_secret_key
    if not secret:
        return VerificationResult(ok=True, reason=REASON_NOT_CONFIGURED)
    if not token:
        return VerificationResult(ok=False, reason=REASON_MISSING_TOKEN)

    form = {"secret": secret, "response": token}
    if client_ip:
        form["remoteip"] = client_ip

    http = session or requests
    try:
        res = http.post(VERIFY_URL, data=form)
        data = res.json()
    except (requests.RequestException, ValueError) as e:
        raise TransientUpstreamFailure(f"reCAPTCHA verification unavailable: {e}") from e
    if not isinstance(data, dict):
        data = {}

    try:
        score = float(data.get("score") or 0.0)
    except (TypeError, ValueError):
        score = 0.0
    ok = data.get("success") is True and score >= settings.recaptcha_min_score
    if not ok:
        logger.info("reCAPTCHA rejected: score=%s error-codes=%s", score, data.get("error-codes"))
    return VerificationResult(ok=ok, score=score, reason=REASON_OK if ok else REASON_FAILED)


def client_ip_from_headers(headers: Mapping[str, str], fallback: Optional[str] = None) -> Optional[str]:
    """First X-Forwarded-For hop, else the socket peer address."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return fallback

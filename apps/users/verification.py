"""Phone verification (OTP) clients.

The SMS gateway is an external service with two operations: send a code
to a phone and check a code the user typed. Clients return a
``VerificationResult`` for every outcome, including transport failures,
so callers branch on the result instead of inspecting exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import requests
from django.conf import settings  # type: ignore
from django.core.exceptions import ImproperlyConfigured  # type: ignore
from django.utils.module_loading import import_string  # type: ignore

logger = logging.getLogger(__name__)


class VerificationStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ERROR = "error"


@dataclass(frozen=True)
class VerificationResult:
    status: VerificationStatus
    error: str = ""

    @property
    def approved(self) -> bool:
        return self.status == VerificationStatus.APPROVED

    @property
    def failed(self) -> bool:
        return self.status == VerificationStatus.ERROR


class BaseVerificationService:
    def send_code(self, phone: str) -> VerificationResult:
        raise NotImplementedError

    def check_code(self, phone: str, code: str) -> VerificationResult:
        raise NotImplementedError


class TwilioVerifyService(BaseVerificationService):
    """Twilio Verify v2 over its REST API."""

    API_URL = "https://verify.twilio.com/v2/Services"

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        service_sid: str,
        country_code: str = "+91",
        timeout: int = 10,
        session: requests.Session | None = None,
    ):
        if not (account_sid and auth_token and service_sid):
            raise ImproperlyConfigured("Twilio Verify credentials are not configured.")
        self.auth = (account_sid, auth_token)
        self.service_sid = service_sid
        self.country_code = country_code
        self.timeout = timeout
        self.session = session or requests.Session()

    def _e164(self, phone: str) -> str:
        return phone if phone.startswith("+") else f"{self.country_code}{phone}"

    def _post(self, endpoint: str, data: dict) -> dict | None:
        url = f"{self.API_URL}/{self.service_sid}/{endpoint}"
        try:
            response = self.session.post(url, data=data, auth=self.auth, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Verification gateway unreachable ({endpoint}): {e}")
            return None

        if response.status_code == 404 and endpoint == "VerificationCheck":
            # Twilio answers 404 once a verification expired or was already consumed
            return {"status": "expired"}
        if not response.ok:
            logger.error(
                f"Verification gateway error ({endpoint}): "
                f"HTTP {response.status_code} {response.text[:200]}"
            )
            return None
        return response.json()

    def send_code(self, phone: str) -> VerificationResult:
        payload = self._post("Verifications", {"To": self._e164(phone), "Channel": "sms"})
        if payload is None:
            return VerificationResult(VerificationStatus.ERROR, "Could not send verification code")
        logger.info(f"Verification code sent to ***{phone[-4:]}")
        return VerificationResult(VerificationStatus.PENDING)

    def check_code(self, phone: str, code: str) -> VerificationResult:
        payload = self._post("VerificationCheck", {"To": self._e164(phone), "Code": code})
        if payload is None:
            return VerificationResult(VerificationStatus.ERROR, "Could not check verification code")
        if payload.get("status") == "approved":
            return VerificationResult(VerificationStatus.APPROVED)
        return VerificationResult(VerificationStatus.REJECTED, "Invalid or expired code")


class StaticCodeVerificationService(BaseVerificationService):
    """Development backend: nothing is sent, one fixed code is accepted."""

    def __init__(self, code: str = "123456", **kwargs):
        self.code = code

    def send_code(self, phone: str) -> VerificationResult:
        logger.info(f"[dev] verification code for ***{phone[-4:]} is {self.code}")
        return VerificationResult(VerificationStatus.PENDING)

    def check_code(self, phone: str, code: str) -> VerificationResult:
        if code == self.code:
            return VerificationResult(VerificationStatus.APPROVED)
        return VerificationResult(VerificationStatus.REJECTED, "Invalid or expired code")


def get_verification_service() -> BaseVerificationService:
    """Build the backend configured in settings.PHONE_VERIFICATION."""
    config = dict(getattr(settings, "PHONE_VERIFICATION", {}))
    backend = config.pop("BACKEND", "apps.users.verification.StaticCodeVerificationService")
    options = {key.lower(): value for key, value in config.items()}
    return import_string(backend)(**options)

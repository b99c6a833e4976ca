"""reCAPTCHA verification. Asks Google whether the submitted proof is valid."""

import logging

import requests
from fastapi import Depends

from scriptshare.config import Config, get_config
from scriptshare.errors.captcha import CaptchaValidationError

logger = logging.getLogger(__name__)


class CaptchaService:
    def __init__(self, config: Config = Depends(get_config)):
        self.config = config

    def validate(self, captcha_response: str | None, remote_ip: str | None = None) -> None:
        """Raise CaptchaValidationError unless the verifier accepts the proof."""
        if not captcha_response or not captcha_response.strip():
            raise CaptchaValidationError("captcha response is missing")

        data = {
            "secret": self.config.recaptcha_private_key,
            "response": captcha_response,
        }
        if remote_ip:
            data["remoteip"] = remote_ip
        try:
            response = requests.post(
                self.config.recaptcha_verify_url, data=data, timeout=5
            )
            response.raise_for_status()
            result = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("CaptchaService: verification request failed: %s", exc)
            raise CaptchaValidationError("verification service unavailable") from exc

        if not result.get("success"):
            error_codes = result.get("error-codes") or []
            logger.info("CaptchaService: proof rejected, error_codes=%s", error_codes)
            raise CaptchaValidationError(", ".join(error_codes) or None)

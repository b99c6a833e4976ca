"""Captcha usage errors"""

from scriptshare.errors.base import ApplicationError


class CaptchaValidationError(ApplicationError):
    http_code = 400
    error_code = 3001
    error = "Captcha validation failed"

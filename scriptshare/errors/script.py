"""Script usage errors"""

from scriptshare.errors.base import ApplicationError


class MissingPermalink(ApplicationError):
    http_code = 400
    error_code = 2001
    error = "Hrm, something is missing here"


class UniquenessViolation(ApplicationError):
    http_code = 500
    error_code = 2002
    error = "Permalink is already taken"


class PermalinkExhausted(ApplicationError):
    http_code = 500
    error_code = 2003
    error = "Could not find a free permalink"

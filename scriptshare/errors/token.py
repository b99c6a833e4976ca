"""Token authentication usage errors"""

from scriptshare.errors.base import ApplicationError


class TokenInvalid(ApplicationError):
    http_code = 401
    error_code = 4001
    error = "Token is invalid"


class Unauthorized(ApplicationError):
    http_code = 401
    error_code = 4002
    error = "No way!"

# =============================================================================
# core/errors.py  -  Failures raised by the openFDA client
# =============================================================================
#
# Only the transport client raises.  Query builders and formatters never do.
# The tool layer catches FDAAPIError and turns it into an MCP error result,
# so one failed call never takes the server down.
#
#   FDAAPIError
#     ├── BadRequestError   4xx (not 404/429)   terminal, no retry
#     ├── RateLimitError    429                 terminal, rate_limited=True
#     ├── ServerError       5xx                 transient, retried
#     └── NetworkError      timeout/connection  transient, retried
#
# 404 is NOT an error: openFDA answers "no matches" with a 404, which the
# client turns into an empty result.
# =============================================================================


class FDAAPIError(Exception):
    """Base class for every failure surfaced by OpenFDAClient."""

    transient = False
    rate_limited = False

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BadRequestError(FDAAPIError):
    """openFDA rejected the request (malformed query, unknown field, ...)."""


class RateLimitError(FDAAPIError):
    """Too many requests for the current key (or lack of one)."""

    rate_limited = True


class ServerError(FDAAPIError):
    """openFDA answered with a 5xx."""

    transient = True


class NetworkError(FDAAPIError):
    """The request never produced an HTTP response (timeout, DNS, refused)."""

    transient = True

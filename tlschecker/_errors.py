"""
Errors raised while checking a domain against the remote service
"""
from typing import Optional


class CheckError(Exception):
    """Base class for every failure of a remote check"""


class CheckRequestError(CheckError):
    """The request to the remote service could not be built"""


class CheckTransportError(CheckError):
    """The request could not be delivered or the connection broke"""


class CheckTimeoutError(CheckTransportError):
    """The remote service did not answer within the timeout"""


class CheckStatusError(CheckError):
    """The remote service answered with a status outside 200-299"""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        status = f"{status_code} {self.reason}".strip()
        super().__init__(f"API result failed: {status}")


class CheckDecodeError(CheckError):
    """The response body is not a valid inspection result"""

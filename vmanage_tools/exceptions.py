"""
Error types raised by the vManage helpers
"""
import re
from typing import Optional

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def single_line(text) -> str:
    """Collapse line breaks so error text prints on one line"""
    return _LINE_BREAKS.sub(" ", str(text))


class VManageError(Exception):
    """Base class for every error raised by this package"""


class UrlValidationError(VManageError):
    """The URL does not use the https scheme"""


class AuthenticationError(VManageError):
    """Login or token retrieval failed"""


class FetchError(VManageError):
    """A GET against /dataservice failed or returned a malformed envelope"""


class QueryError(VManageError):
    """The event query could not be completed"""


class ResetError(VManageError):
    """
    The interface reset was rejected.

    vManage sometimes answers HTTP 200 with an error dialog in the body, so
    both the status code and the body are kept.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(single_line(message))
        self.status_code = status_code
        self.body = single_line(body)

"""
Error types raised by the z/OS files client and search engine
"""
import json
from typing import Any, Optional


class ZosFilesError(Exception):
    """ Base class for all z/OS files errors
    """
    def __init__(self, msg: str, cause_errors: Any = None, additional_details: Optional[str] = None):
        self.msg = msg
        self.cause_errors = cause_errors
        self.additional_details = additional_details
        super().__init__(msg)

    def __str__(self):
        return self.msg

    def __repr__(self):
        return f"{self.__class__.__name__}({self.msg!r})"


class ZosmfRestError(ZosFilesError):
    """ Error returned by a z/OSMF REST endpoint, or raised while reaching it
    """
    def __init__(self, msg: str, status: Optional[int] = None, cause_errors: Any = None,
                 additional_details: Optional[str] = None):
        self.status = status
        super().__init__(msg, cause_errors, additional_details)


AUTH_FAILURE_MESSAGE = (
    "This operation requires authentication.\n\n"
    "Username or password are not valid or expired."
)


def process_error(error: ZosmfRestError) -> ZosmfRestError:
    """
    Clean up a REST error before it is shown to a user

    Removes the server-side stack from JSON cause errors and explains
    authentication failures.

    Args:
        error: Error built from the failing response

    Returns:
        The same error, modified in place
    """
    if isinstance(error.cause_errors, str) and error.cause_errors:
        try:
            cause = json.loads(error.cause_errors)
        except ValueError:
            cause = None
        if isinstance(cause, dict) and "stack" in cause:
            del cause["stack"]
            error.cause_errors = json.dumps(cause)

    if error.status == 401:
        if not error.cause_errors:
            error.cause_errors = json.dumps({"Error": error.msg})
        error.msg = f"{error.msg}\n\n{AUTH_FAILURE_MESSAGE}"
        error.args = (error.msg,)

    return error

"""
Exceptions raised by the azkit clients.

HTTP failures are decoded into HttpResponseError subclasses that carry the
service's error payload verbatim. Transport failures are the plain requests
exceptions and are never wrapped.
"""

import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from requests import Response


class ODataError(BaseModel):
    """
    The `error` object Azure services put in the body of a failed response. ARM
    and Key Vault both use this shape; Key Vault names the nested error
    `innererror` while ARM uses `details`.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    code: Optional[str] = None
    message: Optional[str] = None
    target: Optional[str] = None
    details: Optional[List["ODataError"]] = None
    innererror: Optional["ODataError"] = None


class AzkitError(RuntimeError):
    """
    Base class for all the errors raised by azkit itself.
    """


class DecodeError(AzkitError, ValueError):
    """
    Raised when a response body or an identifier cannot be decoded into the
    expected shape.
    """

    def __init__(self, message: str, response: Optional[Response] = None):
        super().__init__(message)
        self.response = response


class HttpResponseError(AzkitError):
    """
    A response with a status code that the operation does not declare as a
    success.
    """

    def __init__(self, response: Response, message: Optional[str] = None):
        self.response = response
        self.status_code: int = response.status_code
        self.reason: str = response.reason or ""
        self.error: Optional[ODataError] = _parse_error(response)
        if message is None:
            if self.error is not None and (self.error.code or self.error.message):
                message = f"({self.error.code}) {self.error.message}"
            else:
                message = f"Operation returned an invalid status '{self.reason}'"
        self.message = message
        super().__init__(message)

    def __str__(self):
        return f"{self.status_code} {self.message}"


class ClientError(HttpResponseError):
    """
    A 4xx response.
    """


class ServerError(HttpResponseError):
    """
    A 5xx response.
    """


class ClientAuthenticationError(ClientError):
    pass


class ResourceNotFoundError(ClientError):
    pass


class ResourceExistsError(ClientError):
    pass


class PollingTimeoutError(AzkitError, TimeoutError):
    """
    A long running operation did not reach a terminal state within the timeout
    given by the caller. The operation itself keeps going on the service side.
    """


class PagingTimeoutError(AzkitError, TimeoutError):
    pass


_ERROR_MAP = {
    401: ClientAuthenticationError,
    404: ResourceNotFoundError,
    409: ResourceExistsError,
}


def _parse_error(response: Response) -> Optional[ODataError]:
    try:
        body: Any = response.json()
    except (json.JSONDecodeError, ValueError):
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error", body)
    if not isinstance(error, dict):
        return None
    try:
        return ODataError.model_validate(error)
    except ValidationError:
        return None


def error_for_response(response: Response) -> HttpResponseError:
    """
    Returns, but does not raise, the most specific error class for the response.
    """
    if response.status_code in _ERROR_MAP:
        return _ERROR_MAP[response.status_code](response)
    if 400 <= response.status_code < 500:
        return ClientError(response)
    if response.status_code >= 500:
        return ServerError(response)
    return HttpResponseError(response)

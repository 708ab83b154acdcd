"""
Helpers for the unit tests: a requests session that answers from canned
responses instead of the network, and a credential that hands out numbered
tokens.
"""

import json
import time
from collections import deque
from http.client import responses as _REASONS
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Union

import requests
from requests import PreparedRequest, Response
from requests.structures import CaseInsensitiveDict

from ..core.credentials import AccessToken


class FakeResponse(NamedTuple):
    status_code: int = 200
    body: Any = None
    headers: Dict[str, str] = {}


def json_response(
    status_code: int = 200, body: Any = None, headers: Optional[Dict[str, str]] = None
) -> FakeResponse:
    return FakeResponse(status_code, body, dict(headers or {}))


def kv_challenge(resource: str = "https://vault.azure.net") -> FakeResponse:
    """
    The 401 a vault answers to a request without credentials.
    """
    return FakeResponse(
        401,
        None,
        {
            "WWW-Authenticate": (
                'Bearer authorization="https://login.microsoftonline.com/tenant",'
                f' resource="{resource}"'
            )
        },
    )


def _build_response(request: PreparedRequest, fake: FakeResponse) -> Response:
    response = Response()
    response.status_code = fake.status_code
    response.reason = _REASONS.get(fake.status_code, "")
    response.headers = CaseInsensitiveDict(fake.headers)
    if fake.body is None:
        response._content = b""
    elif isinstance(fake.body, bytes):
        response._content = fake.body
    else:
        response._content = json.dumps(fake.body).encode("utf-8")
        response.headers.setdefault("Content-Type", "application/json")
    response.encoding = "utf-8"
    response.request = request
    response.url = request.url
    return response


Handler = Callable[[PreparedRequest], FakeResponse]


class FakeSession(requests.Session):
    """
    A session that never touches the network. It answers either from a queue of
    responses, in order, or from a handler called with each request. Every
    request is recorded, as it was when sent, in `requests`.
    """

    def __init__(self, answers: Union[List[FakeResponse], Handler, None] = None):
        super().__init__()
        self.requests: List[PreparedRequest] = []
        self._handler: Optional[Handler] = None
        self._queue: deque = deque()
        if callable(answers):
            self._handler = answers
        else:
            self._queue.extend(answers or [])

    def add(self, *answers: FakeResponse) -> None:
        self._queue.extend(answers)

    def send(self, request: PreparedRequest, **kwargs: Any) -> Response:
        self.requests.append(request.copy())
        if self._handler is not None:
            fake = self._handler(request)
        elif self._queue:
            fake = self._queue.popleft()
        else:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return _build_response(request, fake)


class FakeCredential(object):
    """
    Returns "token1", "token2", ... and records the scopes and keyword
    arguments of every get_token call.
    """

    def __init__(self, lifetime: int = 3600):
        self.calls: List[Any] = []
        self._lifetime = lifetime

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        self.calls.append((scopes, kwargs))
        return AccessToken(
            f"token{len(self.calls)}", int(time.time()) + self._lifetime
        )

"""
The HTTP pipeline shared by all azkit clients.

A pipeline is an ordered list of policies in front of a requests.Session.
Every request is first turned into a requests.PreparedRequest by the session,
so that the policies see (and may rewrite) the final url, headers and body.
Each policy gets the prepared request and a callable that hands the request
to the rest of the chain; the last link is session.send().
"""

from typing import Any, Callable, Dict, List, Optional

import requests
from requests import PreparedRequest, Response

from ..config import DEFAULT_TIMEOUT

SendCallable = Callable[[PreparedRequest], Response]


class HTTPPolicy(object):
    """
    Base class of all the pipeline policies. A policy that only needs to look at
    the request overrides on_request(); a policy that needs the response, or
    needs to resend, overrides send().
    """

    # Used to find a policy of a given kind in a caller supplied list.
    name: str = "HTTPPolicy"

    def on_request(self, request: PreparedRequest) -> None:
        pass

    def send(self, request: PreparedRequest, next_send: SendCallable) -> Response:
        self.on_request(request)
        return next_send(request)


def _link(policy: HTTPPolicy, next_send: SendCallable) -> SendCallable:
    def send(request: PreparedRequest) -> Response:
        return policy.send(request, next_send)

    return send


class Pipeline(object):
    """
    A chain of policies in front of a requests session. The pipeline owns the
    session unless one is passed in.
    """

    def __init__(
        self,
        policies: Optional[List[HTTPPolicy]] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        self._policies: List[HTTPPolicy] = list(policies or [])
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._chain = self._build_chain()

    @property
    def policies(self) -> List[HTTPPolicy]:
        return list(self._policies)

    def _build_chain(self) -> SendCallable:
        send: SendCallable = self._transport_send
        for policy in reversed(self._policies):
            send = _link(policy, send)
        return send

    def _transport_send(self, request: PreparedRequest) -> Response:
        return self._session.send(request, timeout=self._timeout)

    def run(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Any = None,
        data: Any = None,
    ) -> Response:
        """
        Builds the request, runs it through all the policies and returns the raw
        response. Status codes are not interpreted here.
        """
        request = requests.Request(
            method=method,
            url=url,
            params=params,
            headers=headers,
            json=json,
            data=data,
        )
        prepared = self._session.prepare_request(request)
        return self._chain(prepared)

    def close(self):
        if self._owns_session:
            self._session.close()

"""
The core/client module holds ServiceClient, the base of every azkit client. A
ServiceClient owns the http pipeline (and through it the requests session) and
the client level values that operations bind into their urls, such as the
endpoint, the subscription id and the api version.
"""

import os
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import requests
from requests import Response

from ..config import DEFAULT_TIMEOUT
from .operation import OperationSpec, build_request, deserialize
from .paging import ItemPaged
from .pipeline import HTTPPolicy, Pipeline
from .policies import (
    ApiVersionPolicy,
    BearerTokenPolicy,
    HeadersPolicy,
    LoggingPolicy,
    UserAgentPolicy,
)


def _debug_headers() -> Dict[str, str]:
    """
    AZKIT_DEBUG_HEADERS should be in the format of comma separated
    header_key=header_value pairs. These headers are added to every request.
    """
    raw = os.environ.get("AZKIT_DEBUG_HEADERS")
    if not raw:
        return {}
    headers = {}
    try:
        for pair in raw.split(","):
            key, value = pair.split("=")
            headers[key.strip()] = value.strip()
    except ValueError:
        raise RuntimeError(
            "AZKIT_DEBUG_HEADERS should be in the format of comma separated"
            f" header_key=header_value pairs. Got {raw}"
        )
    return headers


def build_pipeline(
    auth_policy: HTTPPolicy,
    api_version: str,
    policies: Optional[Iterable[HTTPPolicy]] = None,
    user_agent: Optional[str] = None,
    logging_allowed_headers: Iterable[str] = (),
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> Pipeline:
    """
    Assembles the pipeline of a client.

    Without caller policies, the default chain is user agent, debug headers,
    authentication and logging. Caller policies replace that chain; the client's
    authentication policy is appended unless one of them already is a bearer
    token policy. In both cases the api version policy comes last, so that the
    client's api version is the one that goes on the wire.
    """
    chain: List[HTTPPolicy]
    if policies is None:
        chain = [UserAgentPolicy(prefix=user_agent)]
        debug_headers = _debug_headers()
        if debug_headers:
            chain.append(HeadersPolicy(debug_headers))
        chain.append(auth_policy)
        chain.append(LoggingPolicy(logging_allowed_headers))
    else:
        chain = list(policies)
        if not any(p.name == BearerTokenPolicy.name for p in chain):
            chain.append(auth_policy)
    chain.append(ApiVersionPolicy(api_version))
    return Pipeline(chain, session=session, timeout=timeout)


class ServiceClient(object):
    """
    Base class of the azkit clients. Subclasses build the pipeline and pass the
    values that their operation specs mark as client level.

    Clients are context managers; leaving the context closes the session.
    """

    def __init__(self, pipeline: Pipeline, **client_values: Any):
        self._pipeline = pipeline
        self._client_values: Dict[str, Any] = client_values

    def _send_operation(
        self, spec: OperationSpec, kwargs: Dict[str, Any]
    ) -> Response:
        prepared = build_request(spec, self._client_values, kwargs)
        return self._pipeline.run(
            prepared.method,
            prepared.url,
            params=prepared.params,
            headers=prepared.headers,
            json=prepared.json,
        )

    def send_operation_request(self, spec: OperationSpec, **kwargs: Any) -> Any:
        """
        Sends the operation described by spec with the given arguments and
        returns the deserialized body, or None for operations without a body.
        Raises an HttpResponseError subclass for undeclared status codes.
        """
        return deserialize(spec, self._send_operation(spec, kwargs))

    def send_operation_raw(
        self, spec: OperationSpec, **kwargs: Any
    ) -> Tuple[Response, Any]:
        """
        Same as send_operation_request, but also returns the raw response, for
        callers that need the headers (e.g. long running operations).
        """
        response = self._send_operation(spec, kwargs)
        return response, deserialize(spec, response)

    def send_next_page(self, spec: OperationSpec, next_link: str) -> Any:
        """
        Fetches the page at a next link returned by the service. The link is used
        verbatim; only its api-version is stamped by the pipeline.
        """
        response = self._pipeline.run(
            "GET", next_link, headers={"Accept": spec.accept}
        )
        return deserialize(spec, response)

    def list_operation(
        self,
        spec: OperationSpec,
        convert: Optional[Callable[[Any], Any]] = None,
        page_size_param: Optional[str] = None,
        max_page_size: Optional[int] = None,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> ItemPaged:
        """
        Returns an ItemPaged over a list operation whose response model has the
        usual `value` and `next_link` fields. Nothing is sent until the result is
        iterated.

        :param convert: applied to each item of each page.
        :param page_size_param: keyword argument of the operation that carries the
            page size hint on the first request, e.g. max_results.
        """

        def get_page(
            continuation_token: Optional[str], page_size: Optional[int]
        ) -> Tuple[Optional[List[Any]], Optional[str]]:
            if continuation_token is None:
                call_kwargs = dict(kwargs)
                if page_size_param is not None and page_size is not None:
                    call_kwargs[page_size_param] = page_size
                page = self.send_operation_request(spec, **call_kwargs)
            else:
                page = self.send_next_page(spec, continuation_token)
            if page is None or page.value is None:
                return None, None
            items = page.value
            if convert is not None:
                items = [convert(item) for item in items]
            return items, page.next_link

        return ItemPaged(get_page, max_page_size=max_page_size, timeout=timeout)

    def close(self) -> None:
        self._pipeline.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_details):
        self.close()

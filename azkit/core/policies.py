"""
Pipeline policies: user agent, api-version stamping, bearer token
authentication (with ARM claims challenges and Key Vault discovery
challenges), and request logging.
"""

import base64
import platform
import re
import sys
import time
from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlparse

from loguru import logger
from requests import PreparedRequest, Response

from .._internal.logging import log as internal_log
from ..config import (
    LOG_ALL_HEADERS,
    SDK_MONIKER,
    TOKEN_REFRESH_MARGIN,
    USER_AGENT_PREFIX,
)
from .exceptions import AzkitError
from .pipeline import HTTPPolicy, SendCallable


class UserAgentPolicy(HTTPPolicy):
    name = "UserAgentPolicy"

    def __init__(self, sdk_moniker: str = SDK_MONIKER, prefix: Optional[str] = None):
        prefix = prefix if prefix is not None else USER_AGENT_PREFIX
        python = "Python/{}.{}.{}".format(*sys.version_info[:3])
        user_agent = f"{sdk_moniker} {python} ({platform.platform()})"
        self.user_agent = f"{prefix} {user_agent}" if prefix else user_agent

    def on_request(self, request: PreparedRequest) -> None:
        request.headers["User-Agent"] = self.user_agent


def set_api_version(url: str, api_version: str) -> str:
    """
    Returns the url with the value of its `api-version` query parameter replaced.
    Only that exact key is touched: other parameters, their order and their
    encoding are kept as they are. A url without `api-version` is returned as is.
    """
    base, sep, query = url.partition("?")
    if not sep:
        return url
    query, frag_sep, fragment = query.partition("#")
    items = []
    for item in query.split("&"):
        key = item.split("=", 1)[0]
        if key == "api-version":
            item = f"api-version={api_version}"
        items.append(item)
    return base + "?" + "&".join(items) + frag_sep + fragment


class ApiVersionPolicy(HTTPPolicy):
    """
    Stamps the client's api version on every outgoing request. It sits after all
    the other policies that may build or rewrite the url, including caller
    supplied ones, so the version declared by the client always wins. This also
    covers next links and polling urls handed back by the service.
    """

    name = "ApiVersionPolicy"

    def __init__(self, api_version: str):
        if not api_version:
            raise ValueError("api_version must be a non-empty string.")
        self.api_version = api_version

    def on_request(self, request: PreparedRequest) -> None:
        request.url = set_api_version(request.url, self.api_version)


_CHALLENGE_PARAM = re.compile(r'(\w+)\s*=\s*"([^"]*)"')


def parse_challenge(header: str) -> Dict[str, str]:
    """
    Parses a `WWW-Authenticate: Bearer k1="v1", k2="v2"` header into a dict with
    lower cased keys. Returns an empty dict for non-bearer challenges.
    """
    scheme, _, rest = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return {}
    return {k.lower(): v for k, v in _CHALLENGE_PARAM.findall(rest)}


def _decode_claims(encoded: str) -> str:
    padding = "=" * (-len(encoded) % 4)
    return base64.urlsafe_b64decode(encoded + padding).decode("utf-8")


class BearerTokenPolicy(HTTPPolicy):
    """
    Adds an `Authorization: Bearer` header from the credential, caching the token
    until it is about to expire. When the service answers 401 with a claims
    challenge (`error="insufficient_claims"`), a token carrying the required
    claims is requested and the request is sent once more.
    """

    name = "BearerTokenPolicy"

    def __init__(self, credential: Any, *scopes: str, enforce_https: bool = True):
        if credential is None:
            raise ValueError("credential cannot be None.")
        self._credential = credential
        self._scopes = scopes
        self._enforce_https = enforce_https
        self._token: Any = None

    def _need_new_token(self) -> bool:
        return (
            self._token is None
            or self._token.expires_on - time.time() < TOKEN_REFRESH_MARGIN
        )

    def _request_token(self, *scopes: str, **kwargs: Any) -> None:
        logger.trace(f"Requesting token for scopes {scopes}")
        self._token = self._credential.get_token(*scopes, **kwargs)

    def _authorize(self, request: PreparedRequest) -> None:
        if self._enforce_https and not request.url.lower().startswith("https"):
            raise AzkitError(
                "Bearer token authentication is not permitted for non-TLS protected"
                f" (non-https) URLs: {request.url}"
            )
        if self._need_new_token():
            self._request_token(*self._scopes)
        request.headers["Authorization"] = f"Bearer {self._token.token}"

    def on_challenge(self, request: PreparedRequest, response: Response) -> bool:
        """
        Handles a 401 response. Returns True if the request was re-authorized and
        should be sent again.
        """
        challenge = parse_challenge(response.headers.get("WWW-Authenticate", ""))
        if challenge.get("error") != "insufficient_claims" or not challenge.get(
            "claims"
        ):
            return False
        try:
            claims = _decode_claims(challenge["claims"])
        except (ValueError, UnicodeDecodeError):
            logger.warning("Ignoring a claims challenge that is not valid base64.")
            return False
        self._request_token(*self._scopes, claims=claims)
        request.headers["Authorization"] = f"Bearer {self._token.token}"
        return True

    def send(self, request: PreparedRequest, next_send: SendCallable) -> Response:
        self._authorize(request)
        response = next_send(request)
        if response.status_code == 401 and "WWW-Authenticate" in response.headers:
            if self.on_challenge(request, response):
                response = next_send(request)
        return response


class KeyVaultChallengePolicy(BearerTokenPolicy):
    """
    Key Vault does not publish the scope of its tokens up front: the first
    request is sent without credentials and the vault answers 401 with a
    challenge that names the resource (or scope) to get a token for. The scope
    is cached for the lifetime of the policy, which is the lifetime of a client.

    The unauthenticated probe never carries the request body.
    """

    name = "BearerTokenPolicy"

    def __init__(self, credential: Any, *scopes: str, enforce_https: bool = True):
        super().__init__(credential, *scopes, enforce_https=enforce_https)

    def _scope_from_challenge(
        self, request: PreparedRequest, response: Response
    ) -> Optional[str]:
        challenge = parse_challenge(response.headers.get("WWW-Authenticate", ""))
        scope = challenge.get("scope")
        if not scope:
            resource = challenge.get("resource")
            if not resource:
                return None
            scope = resource.rstrip("/") + "/.default"
        scope_host = urlparse(scope).hostname or ""
        request_host = urlparse(request.url).hostname or ""
        # the vault host must live under the host named by the challenge
        if scope_host and not ("." + request_host).endswith("." + scope_host):
            raise AzkitError(
                f"The challenge resource '{scope}' does not match the requested"
                f" domain '{request_host}'."
            )
        return scope

    def send(self, request: PreparedRequest, next_send: SendCallable) -> Response:
        if not self._scopes:
            probe = request.copy()
            if probe.body:
                probe.body = None
                probe.headers["Content-Length"] = "0"
            response = next_send(probe)
            if response.status_code != 401:
                return response
            scope = self._scope_from_challenge(request, response)
            if scope is None:
                return response
            logger.debug(f"Key Vault challenge discovered scope {scope}")
            self._scopes = (scope,)
        self._authorize(request)
        response = next_send(request)
        if response.status_code == 401 and "WWW-Authenticate" in response.headers:
            if self.on_challenge(request, response):
                response = next_send(request)
        return response

    def on_challenge(self, request: PreparedRequest, response: Response) -> bool:
        if super().on_challenge(request, response):
            return True
        # The vault may have moved tenants; pick up the new scope and try once.
        scope = self._scope_from_challenge(request, response)
        if scope is None:
            return False
        self._scopes = (scope,)
        self._request_token(scope)
        request.headers["Authorization"] = f"Bearer {self._token.token}"
        return True


_DEFAULT_ALLOWED_HEADERS = frozenset(
    h.lower()
    for h in (
        "x-ms-request-id",
        "x-ms-client-request-id",
        "x-ms-return-client-request-id",
        "x-ms-correlation-request-id",
        "x-ms-routing-request-id",
        "x-ms-error-code",
        "traceparent",
        "Accept",
        "Cache-Control",
        "Connection",
        "Content-Length",
        "Content-Type",
        "Date",
        "ETag",
        "Expires",
        "If-Match",
        "If-None-Match",
        "Last-Modified",
        "Pragma",
        "Request-Id",
        "Retry-After",
        "Server",
        "Transfer-Encoding",
        "User-Agent",
        "WWW-Authenticate",
        "Location",
        "Azure-AsyncOperation",
    )
)
_ALLOWED_QUERY_PARAMS = frozenset(("api-version", "maxresults", "$skiptoken"))


def _redact_url(url: str) -> str:
    base, sep, query = url.partition("?")
    if not sep:
        return url
    items = []
    for item in query.split("&"):
        key, eq, _ = item.partition("=")
        if eq and key not in _ALLOWED_QUERY_PARAMS:
            item = f"{key}=REDACTED"
        items.append(item)
    return base + "?" + "&".join(items)


class LoggingPolicy(HTTPPolicy):
    """
    Logs every request line and response status at debug level. Header values
    are redacted unless the header is in the allow list, and query values are
    redacted except for a few well known parameters.
    """

    name = "LoggingPolicy"

    def __init__(self, allowed_header_names: Iterable[str] = ()):
        self._allowed = _DEFAULT_ALLOWED_HEADERS | {
            h.lower() for h in allowed_header_names
        }

    def _headers(self, headers) -> Dict[str, str]:
        return {
            k: (v if LOG_ALL_HEADERS or k.lower() in self._allowed else "REDACTED")
            for k, v in headers.items()
        }

    def send(self, request: PreparedRequest, next_send: SendCallable) -> Response:
        url = _redact_url(request.url)
        logger.debug(f"Request: {request.method} {url}")
        internal_log(
            f"Request: {request.method} {url} {self._headers(request.headers)}"
        )
        start = time.time()
        response = next_send(request)
        elapsed = time.time() - start
        logger.debug(
            f"Response: {response.status_code} {request.method} {url} ({elapsed:.3f}s)"
        )
        internal_log(
            f"Response: {response.status_code} {self._headers(response.headers)}"
        )
        return response


class HeadersPolicy(HTTPPolicy):
    """
    Adds fixed headers to every request, without overriding headers that are
    already set.
    """

    name = "HeadersPolicy"

    def __init__(self, headers: Dict[str, str]):
        self.headers = dict(headers)

    def on_request(self, request: PreparedRequest) -> None:
        for k, v in self.headers.items():
            request.headers.setdefault(k, v)

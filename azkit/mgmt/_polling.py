"""
Polling of resource manager long running operations.

The initial response tells how to follow the operation:
  - 200 or 204: the operation already completed.
  - 201 or 202 with an Azure-AsyncOperation header: that url serves a status
    document whose `status` field ends in Succeeded, Failed or Canceled.
  - 201 or 202 with a Location header: that url answers 202 while the
    operation runs and 200 or 204 once it is done.
A Retry-After header on any of these responses overrides the polling interval.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Type

from loguru import logger
from pydantic import BaseModel, ValidationError
from requests import Response

from ..core.exceptions import AzkitError, DecodeError, ODataError, error_for_response
from ..core.operation import OperationSpec
from ..core.polling import Poller, PollerState, PollStatus

if TYPE_CHECKING:
    from ._client import ARMClient

_ASYNC_HEADER = "Azure-AsyncOperation"
_LOCATION_HEADER = "Location"

_TERMINAL_FAILURES = ("failed", "canceled", "cancelled")


def _retry_after(response: Response) -> Optional[float]:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        # http dates are valid too, but ARM only sends seconds
        return None


def _failure(status: str, error: Any) -> Dict[str, Any]:
    """
    Keeps the code and message of the `error` of a failed status document. A
    malformed object or a plain string becomes the message as is.
    """
    code = message = None
    if isinstance(error, dict):
        try:
            parsed = ODataError.model_validate(error)
            code, message = parsed.code, parsed.message
        except ValidationError:
            message = str(error)
    elif error:
        message = str(error)
    return {"status": status, "code": code, "message": message}


class ARMPoller(Poller):
    """
    Follows one resource manager long running operation. The poller's name is
    the path of the resource the operation was started on.
    """

    operation = "arm_lro"

    def __init__(
        self,
        client: "ARMClient",
        spec: OperationSpec,
        state: PollerState,
        request_kwargs: Optional[Dict[str, Any]] = None,
        result_type: Optional[Type[BaseModel]] = None,
        polling_interval: Optional[float] = None,
    ):
        if result_type is not None:
            self.result_type = result_type
        self._has_result = result_type is not None
        super().__init__(state, polling_interval=polling_interval)
        self._client = client
        self._spec = spec
        self._request_kwargs = dict(request_kwargs or {})
        self._retry_after: Optional[float] = None
        failure = self._state.data.get("failure")
        if self._state.status == PollStatus.FAILED and failure:
            self._error = self._failure_error(failure)

    def _failure_error(self, failure: Dict[str, Any]) -> AzkitError:
        detail = failure.get("message") or "no error details"
        if failure.get("code"):
            detail = f"({failure['code']}) {detail}"
        return AzkitError(
            f"{self._spec.name} on {self._state.name} ended with status"
            f" {failure.get('status')}: {detail}"
        )

    def _next_interval(self) -> float:
        if self._retry_after is not None:
            return self._retry_after
        return self._polling_interval

    def _deserialize_result(self, response: Response) -> Any:
        if not self._has_result or not response.content:
            return None
        try:
            return self.result_type.model_validate(response.json())
        except ValueError as e:
            raise DecodeError(
                f"Cannot decode the result of {self._spec.name}: {e}", response=response
            ) from e

    def _start(self) -> None:
        response, _ = self._client.send_operation_raw(
            self._spec, **self._request_kwargs
        )
        self._retry_after = _retry_after(response)
        data = self._state.data
        if response.status_code in (201, 202) and _ASYNC_HEADER in response.headers:
            data["mode"] = "async"
            data["polling_url"] = response.headers[_ASYNC_HEADER]
        elif (
            response.status_code in (201, 202) and _LOCATION_HEADER in response.headers
        ):
            data["mode"] = "location"
            data["polling_url"] = response.headers[_LOCATION_HEADER]
        else:
            self._result = self._deserialize_result(response)
            self._set_status(PollStatus.SUCCEEDED)
            return
        if self._spec.method in ("PUT", "PATCH"):
            # the resource itself holds the final result
            data["final_url"] = response.request.url
        elif _LOCATION_HEADER in response.headers:
            data["final_url"] = response.headers[_LOCATION_HEADER]
        logger.trace(f"{self._spec.name} polls {data['polling_url']} ({data['mode']})")
        self._set_status(PollStatus.IN_PROGRESS)

    def _get(self, url: str) -> Response:
        response = self._client._pipeline.run(
            "GET", url, headers={"Accept": "application/json"}
        )
        self._retry_after = _retry_after(response)
        return response

    def _finish(self, response: Optional[Response] = None) -> None:
        final_url = self._state.data.get("final_url")
        if self._has_result and final_url and final_url != self._state.data.get(
            "polling_url"
        ):
            response = self._get(final_url)
            if response.status_code not in (200, 201, 204):
                raise error_for_response(response)
        if response is not None:
            self._result = self._deserialize_result(response)
        self._set_status(PollStatus.SUCCEEDED)

    def _poll_once(self) -> None:
        if self._state.status == PollStatus.NOT_STARTED:
            self._start()
            return
        response = self._get(self._state.data["polling_url"])
        if self._state.data["mode"] == "async":
            if response.status_code != 200:
                raise error_for_response(response)
            try:
                status = str(response.json().get("status", ""))
            except (ValueError, AttributeError) as e:
                raise DecodeError(
                    f"Cannot decode the status of {self._spec.name}.", response=response
                ) from e
            if status.lower() == "succeeded":
                self._finish()
            elif status.lower() in _TERMINAL_FAILURES:
                failure = _failure(status, response.json().get("error"))
                self._state.data["failure"] = failure
                self._error = self._failure_error(failure)
                self._set_status(PollStatus.FAILED)
        else:
            if response.status_code == 202:
                return
            if response.status_code not in (200, 201, 204):
                raise error_for_response(response)
            self._finish(response)

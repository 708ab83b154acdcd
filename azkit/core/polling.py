"""
Long running operations.

A Poller drives one operation on one resource through
NotStarted -> InProgress -> Succeeded | Failed. Subclasses implement a single
round trip in _poll_once(); the base class keeps the state monotonic, sleeps
between polls, enforces the caller's timeout and (de)serializes the state so
that a new process can pick up where an old one stopped.
"""

import asyncio
import time
from enum import Enum
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from ..config import DEFAULT_POLLING_INTERVAL
from .exceptions import AzkitError, HttpResponseError, PollingTimeoutError

T = TypeVar("T", bound=BaseModel)


class PollStatus(str, Enum):
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"

    def is_terminal(self) -> bool:
        return self in (PollStatus.SUCCEEDED, PollStatus.FAILED)


class PollerState(BaseModel):
    """
    Everything needed to resume a poller. This is what continuation_token()
    returns, serialized as json.
    """

    operation: str
    name: str
    status: PollStatus = PollStatus.NOT_STARTED
    # The last known result, serialized with the result model.
    result: Optional[Dict[str, Any]] = None
    # Operation specific data, e.g. the status url of an ARM operation.
    data: Dict[str, Any] = {}


class Poller(Generic[T]):
    """
    Base class of all the pollers. `operation` names the operation kind and is
    checked when resuming from a token; `result_type` is the pydantic model of
    the final result.
    """

    operation: str = ""
    result_type: Type[BaseModel] = BaseModel

    def __init__(
        self,
        state: PollerState,
        polling_interval: Optional[float] = None,
    ):
        self._state = state
        self._polling_interval = (
            polling_interval
            if polling_interval is not None
            else DEFAULT_POLLING_INTERVAL
        )
        self._result: Optional[T] = None
        self._error: Optional[Exception] = None
        if state.result is not None:
            self._result = self.result_type.model_validate(state.result)  # type: ignore

    @property
    def name(self) -> str:
        return self._state.name

    def status(self) -> PollStatus:
        return self._state.status

    def done(self) -> bool:
        return self._state.status.is_terminal()

    def _poll_once(self) -> None:
        """
        Performs at most one round trip and updates the state. Implemented by
        subclasses.
        """
        raise NotImplementedError

    def _set_status(self, status: PollStatus) -> None:
        if status != self._state.status:
            logger.trace(
                f"{self.operation} {self._state.name}: {self._state.status.value} ->"
                f" {status.value}"
            )
        self._state.status = status

    def _next_interval(self) -> float:
        return self._polling_interval

    def poll(self) -> PollStatus:
        """
        Polls once, unless the operation already reached a terminal state, in
        which case nothing is sent. Returns the status after the poll.

        HTTP errors that mean the operation failed move the poller to Failed and
        are raised. Transport errors are raised without touching the state, so
        polling can be retried.
        """
        if self.done():
            return self._state.status
        try:
            self._poll_once()
        except HttpResponseError as e:
            self._error = e
            self._set_status(PollStatus.FAILED)
            raise
        return self._state.status

    def _remaining(self, deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise PollingTimeoutError(
                f"The {self.operation} operation on {self._state.name} did not finish"
                " within the given timeout."
            )
        return remaining

    def wait(self, timeout: Optional[float] = None) -> None:
        """
        Polls until the operation reaches a terminal state.

        :param timeout: seconds to wait at most. None waits indefinitely.
        :raises PollingTimeoutError: if the timeout elapses first.
        """
        deadline = time.monotonic() + timeout if timeout is not None else None
        while not self.done():
            if self._state.status != PollStatus.NOT_STARTED:
                remaining = self._remaining(deadline)
                interval = self._next_interval()
                time.sleep(interval if remaining is None else min(interval, remaining))
            self.poll()

    async def async_wait(self, timeout: Optional[float] = None) -> None:
        """
        Same as wait(), but sleeps with asyncio between polls so an event loop is
        free to run other tasks in the meantime. Each poll is still a blocking
        round trip.
        """
        deadline = time.monotonic() + timeout if timeout is not None else None
        while not self.done():
            if self._state.status != PollStatus.NOT_STARTED:
                remaining = self._remaining(deadline)
                interval = self._next_interval()
                await asyncio.sleep(
                    interval if remaining is None else min(interval, remaining)
                )
            self.poll()

    def result(self, timeout: Optional[float] = None) -> T:
        """
        Polls until done and returns the final result, or raises the error that
        made the operation fail.
        """
        self.wait(timeout)
        if self._state.status == PollStatus.FAILED:
            if self._error is not None:
                raise self._error
            raise AzkitError(
                f"The {self.operation} operation on {self._state.name} failed."
            )
        return self._result  # type: ignore

    def continuation_token(self) -> str:
        """
        Returns an opaque string that can be handed to the matching begin_*
        method, in this process or another one, to resume this operation.
        """
        if self._result is not None:
            self._state.result = self._result.model_dump(mode="json")
        return self._state.model_dump_json()

    @classmethod
    def state_from_token(cls, token: str, name: str) -> PollerState:
        try:
            state = PollerState.model_validate_json(token)
        except ValidationError as e:
            raise ValueError(f"Invalid continuation token: {e}") from e
        if state.operation != cls.operation:
            raise ValueError(
                f"The continuation token belongs to a {state.operation} operation, not"
                f" a {cls.operation} operation."
            )
        if state.name != name:
            raise ValueError(
                f"The continuation token belongs to {state.name}, not to {name}."
            )
        return state

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} name={self._state.name}"
            f" status={self._state.status.value}>"
        )

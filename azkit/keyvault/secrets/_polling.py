"""
Pollers of the delete and recover secret operations.

Key Vault has no operation status resource: deleting or recovering a secret
returns right away while the vault keeps working in the background. The
pollers therefore send the initiating request on their first poll and then
probe the resource the operation produces until the vault serves it.
"""

from typing import TYPE_CHECKING, Any, Optional

from ...core.exceptions import HttpResponseError, ResourceNotFoundError
from ...core.polling import Poller, PollerState, PollStatus
from ._models import DeletedSecret, SecretProperties

if TYPE_CHECKING:
    from ._client import SecretClient


class _SecretProbePoller(Poller):
    def __init__(
        self,
        client: "SecretClient",
        state: PollerState,
        polling_interval: Optional[float] = None,
    ):
        super().__init__(state, polling_interval=polling_interval)
        self._client = client

    def _start(self) -> Any:
        raise NotImplementedError

    def _probe(self) -> Any:
        raise NotImplementedError

    def _poll_once(self) -> None:
        if self._state.status == PollStatus.NOT_STARTED:
            self._result = self._start()
            self._set_status(PollStatus.IN_PROGRESS)
            return
        try:
            self._result = self._probe()
            self._set_status(PollStatus.SUCCEEDED)
        except ResourceNotFoundError:
            # not there yet
            pass
        except HttpResponseError as e:
            if e.status_code != 403:
                raise
            # The caller may be allowed to run the operation but not to read its
            # outcome. The operation was accepted, keep its initial result.
            self._set_status(PollStatus.SUCCEEDED)


class DeleteSecretPoller(_SecretProbePoller):
    """
    Deletes a secret and waits until the vault serves it as a deleted secret.
    The result is the DeletedSecret.
    """

    operation = "delete_secret"
    result_type = DeletedSecret

    def _start(self) -> DeletedSecret:
        return self._client._delete_secret(self.name)

    def _probe(self) -> DeletedSecret:
        return self._client.get_deleted_secret(self.name)


class RecoverDeletedSecretPoller(_SecretProbePoller):
    """
    Recovers a deleted secret and waits until the vault serves the secret
    again. The result is the SecretProperties of the recovered version.
    """

    operation = "recover_deleted_secret"
    result_type = SecretProperties

    def _start(self) -> SecretProperties:
        return self._client._recover_deleted_secret(self.name)

    def _probe(self) -> SecretProperties:
        return self._client.get_secret(self.name).properties

from typing import Any, Iterable, List, Optional, Type
from urllib.parse import urlparse

import requests
from pydantic import BaseModel

from ..config import ARM_ENDPOINT, DEFAULT_TIMEOUT, ENV_SUBSCRIPTION_ID
from ..core.client import ServiceClient, build_pipeline
from ..core.operation import OperationSpec, build_request
from ..core.pipeline import HTTPPolicy
from ..core.policies import BearerTokenPolicy
from ..core.polling import PollerState, PollStatus
from ..profile import ProfileRecord
from ._polling import ARMPoller


class ARMClient(ServiceClient):
    """
    Base class of the resource manager clients. A subclass sets the api version
    of its service and registers its operation groups in __init__.

    Subscription scoped operations bind the client's subscription id. Services
    that also have tenant level operations set `subscription_required` to False,
    in which case calling a subscription scoped operation without a
    subscription id raises ValueError.
    """

    # The api version the service's operation tables were written against.
    api_version: str = ""
    subscription_required: bool = True

    def __init__(
        self,
        credential: Any,
        subscription_id: Optional[str] = None,
        *,
        endpoint: Optional[str] = None,
        api_version: Optional[str] = None,
        credential_scopes: Optional[List[str]] = None,
        policies: Optional[Iterable[HTTPPolicy]] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        polling_interval: Optional[float] = None,
    ):
        """
        :param credential: an object with a get_token(*scopes) method, such as
            the azure-identity credentials.
        :param subscription_id: the subscription to operate in. Falls back to
            AZKIT_SUBSCRIPTION_ID, then to the local profile (azk profile set).
        :param endpoint: the resource manager endpoint, defaults to
            AZKIT_ARM_ENDPOINT or https://management.azure.com.
        :param credential_scopes: scopes of the requested tokens, defaults to
            {endpoint}/.default.
        :param policies: replaces the default pipeline policies. A bearer token
            policy for the credential is added unless one of them is one.
        """
        if credential is None:
            raise ValueError("credential cannot be None.")
        subscription_id = ProfileRecord.subscription_id(subscription_id)
        if not subscription_id and self.subscription_required:
            raise ValueError(
                "subscription_id must be given, or"
                f" {ENV_SUBSCRIPTION_ID} set in the environment or the profile."
            )
        endpoint = (endpoint or ARM_ENDPOINT).rstrip("/")
        api_version = api_version or self.api_version
        if credential_scopes is None:
            credential_scopes = [f"{endpoint}/.default"]
        self.endpoint = endpoint
        self.subscription_id: Optional[str] = subscription_id or None
        self.api_version = api_version
        self._polling_interval = polling_interval
        pipeline = build_pipeline(
            BearerTokenPolicy(credential, *credential_scopes),
            api_version,
            policies=policies,
            user_agent=user_agent,
            session=session,
            timeout=timeout,
        )
        super().__init__(
            pipeline,
            endpoint=endpoint,
            subscription_id=self.subscription_id,
            api_version=api_version,
        )

    def begin_operation(
        self,
        spec: OperationSpec,
        result_type: Optional[Type[BaseModel]] = None,
        polling_interval: Optional[float] = None,
        continuation_token: Optional[str] = None,
        **kwargs: Any,
    ) -> ARMPoller:
        """
        Starts a long running operation, or resumes one from the continuation
        token of an earlier poller for the same resource. The initial request is
        sent before this method returns.
        """
        resource = urlparse(build_request(spec, self._client_values, kwargs).url).path
        if continuation_token:
            state = ARMPoller.state_from_token(continuation_token, resource)
        else:
            state = PollerState(operation=ARMPoller.operation, name=resource)
        poller = ARMPoller(
            self,
            spec,
            state,
            request_kwargs=kwargs,
            result_type=result_type,
            polling_interval=(
                polling_interval
                if polling_interval is not None
                else self._polling_interval
            ),
        )
        if poller.status() == PollStatus.NOT_STARTED:
            poller.poll()
        return poller

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} endpoint={self.endpoint}"
            f" subscription_id={self.subscription_id}>"
        )

# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

"""Minimal binding of the ScaleChamp API.

Only the calls needed to manage instances are bound. Each call issues a
single request; failures are mapped onto scalechamp.errors and raised to the
caller without any retry.
"""

import logging
from typing import Any, TypeVar

import pydantic
import requests

from scalechamp.config import ProviderConfig
from scalechamp.errors import (
    InstanceNotFoundException,
    PlanNotFoundException,
    RemoteException,
    ServiceUnavailableException,
)
from scalechamp.models import (
    Instance,
    InstanceCreateRequest,
    InstanceUpdateRequest,
    Plan,
    PlanFindRequest,
)

LOG = logging.getLogger(__name__)
API_PREFIX = "v1"

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


class BaseService:
    """Shared request handling of the API services."""

    # Raised instead of RemoteException when the API answers 404
    not_found_exception: type[RemoteException] = RemoteException

    def __init__(self, session: requests.Session, endpoint: str, timeout: float):
        self._session = session
        self._endpoint = endpoint
        self._timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self._endpoint}/{API_PREFIX}/{path}"
        LOG.debug(f"{method} {url}")
        try:
            response = self._session.request(
                method=method, url=url, timeout=self._timeout, **kwargs
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise ServiceUnavailableException(
                f"ScaleChamp API is not reachable: {e}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise RemoteException(str(e)) from e

        if response.status_code == 404:
            raise self.not_found_exception(
                self._error_message(response), status_code=404
            )
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise RemoteException(
                self._error_message(response), status_code=response.status_code
            ) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteException(
                f"Unexpected response from {url}: not JSON",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            error = response.json().get("error")
        except (ValueError, AttributeError):
            error = None
        return error or f"{response.status_code} {response.reason}"

    @staticmethod
    def _parse(model: type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            raise RemoteException(
                f"Unexpected response, not a valid {model.__name__}: {e}"
            ) from e

    def _get(self, path: str, **kwargs) -> Any:
        return self._request("get", path, **kwargs)

    def _post(self, path: str, **kwargs) -> Any:
        return self._request("post", path, **kwargs)

    def _patch(self, path: str, **kwargs) -> Any:
        return self._request("patch", path, **kwargs)

    def _delete(self, path: str, **kwargs) -> Any:
        return self._request("delete", path, **kwargs)


class PlanService(BaseService):
    not_found_exception = PlanNotFoundException

    def find(self, request: PlanFindRequest) -> Plan:
        """Resolve a plan by cloud, region, name and kind.

        :raises PlanNotFoundException: if no plan matches
        """
        data = self._get("plans/find", params=request.model_dump())
        return self._parse(Plan, data)


class InstanceService(BaseService):
    not_found_exception = InstanceNotFoundException

    def create(self, request: InstanceCreateRequest) -> Instance:
        data = self._post("instances", json=request.model_dump(exclude_none=True))
        return self._parse(Instance, data)

    def get(self, instance_id: str) -> Instance:
        data = self._get(f"instances/{instance_id}")
        return self._parse(Instance, data)

    def update(self, request: InstanceUpdateRequest) -> Instance | None:
        """Patch the instance, returning it when the API echoes it back."""
        data = self._patch(
            f"instances/{request.id}", json=request.model_dump(exclude_none=True)
        )
        if data is None:
            return None
        return self._parse(Instance, data)

    def delete(self, instance_id: str) -> None:
        self._delete(f"instances/{instance_id}")


class Client:
    """ScaleChamp API client."""

    def __init__(self, endpoint: str, token: str, timeout: float = 30):
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            }
        )
        self.plans = PlanService(self._session, endpoint, timeout)
        self.instances = InstanceService(self._session, endpoint, timeout)

    @classmethod
    def from_config(cls, config: ProviderConfig) -> "Client":
        return cls(config.endpoint, config.token.get_secret_value(), config.timeout)

# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

import logging
import time
import typing
from typing import Any, Callable, Mapping

from scalechamp.client import Client
from scalechamp.config import ProviderConfig
from scalechamp.errors import ResourceTypeNotFoundException
from scalechamp.instance import InstanceResource, Sleep
from scalechamp.resource_data import ResourceData
from scalechamp.schema import Field, Kind

LOG = logging.getLogger(__name__)

# Kinds exposed as resource types
RESOURCE_KINDS = (Kind.REDIS, Kind.KEYDB, Kind.KEYDB_PRO)

LifecycleFunc = Callable[[ResourceData], None]


class Resource(typing.NamedTuple):
    """A resource type: its schema and lifecycle callbacks."""

    schema: Mapping[str, Field]
    create: LifecycleFunc
    read: LifecycleFunc
    update: LifecycleFunc
    delete: LifecycleFunc

    def new_data(
        self,
        config: Mapping[str, Any],
        state: Mapping[str, Any] | None = None,
        id: str | None = None,
    ) -> ResourceData:
        """Build the resource data handed to the lifecycle callbacks."""
        return ResourceData(self.schema, config, state=state, id=id)


class Provider:
    """Registry of the resource types served by the provider."""

    def __init__(self, config: ProviderConfig, sleep: Sleep = time.sleep):
        self.config = config
        self._sleep = sleep
        self._client: Client | None = None
        self._resources: dict[str, Resource] = {}

    @property
    def client(self) -> Client:
        """Return the API client, built on first use."""
        if self._client is None:
            LOG.debug(f"Connecting to {self.config.endpoint}")
            self._client = Client.from_config(self.config)
        return self._client

    def _load_resources(self) -> None:
        if self._resources:
            return
        for kind in RESOURCE_KINDS:
            instance = InstanceResource(kind, self.client, sleep=self._sleep)
            self._resources[kind.resource_type] = Resource(
                schema=instance.schema,
                create=instance.create,
                read=instance.read,
                update=instance.update,
                delete=instance.delete,
            )
            LOG.debug(f"Registered resource type {kind.resource_type}")

    def resources(self) -> Mapping[str, Resource]:
        """Return all resource types keyed by type name."""
        self._load_resources()
        return self._resources

    def get_resource(self, type_name: str) -> Resource:
        """Return a resource type by name.

        :raises ResourceTypeNotFoundException: if the type is not served
        """
        self._load_resources()
        try:
            return self._resources[type_name]
        except KeyError:
            raise ResourceTypeNotFoundException(
                f"Resource type {type_name!r} not found, available: "
                + ", ".join(sorted(self._resources))
            ) from None

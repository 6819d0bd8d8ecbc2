# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

"""Lifecycle of ScaleChamp instances.

InstanceResource turns the configuration of an instance resource into API
calls. Create and update submit the change, then poll the instance until it
is running or failed, and finally read the computed fields back.

Polling gives up after a bounded number of attempts without failing: an
instance still provisioning at that point is read back as is and reported as
created.
"""

import logging
import time
import typing
from typing import Callable

import tenacity

from scalechamp.client import Client
from scalechamp.errors import (
    ComputedFieldsError,
    FieldSetError,
    ProvisioningFailedException,
)
from scalechamp.models import (
    Instance,
    InstanceCreateRequest,
    InstanceState,
    InstanceUpdateRequest,
    Plan,
    PlanFindRequest,
)
from scalechamp.resource_data import ResourceData
from scalechamp.schema import Capability, Kind, has_capability, instance_schema

LOG = logging.getLogger(__name__)

CREATE_POLL_ATTEMPTS = 36
CREATE_POLL_INTERVAL = 10
UPDATE_POLL_ATTEMPTS = 50
UPDATE_POLL_INTERVAL = 5

# A change to any of these may resolve to a different plan
PLAN_KEYS = ("cloud", "region", "plan")

Sleep = Callable[[float], None]


def _to_strings(values: typing.Iterable[str]) -> list[str]:
    """Turn a set of strings into a list with a stable order."""
    return sorted(values)


def _last_observed_instance(retry_state: tenacity.RetryCallState) -> Instance:
    instance = retry_state.outcome.result()  # type: ignore[union-attr]
    LOG.warning(
        f"Instance {instance.id} still {instance.state!r} after "
        f"{retry_state.attempt_number} checks, continuing"
    )
    return instance


def wait_for_instance(
    client: Client,
    instance_id: str,
    attempts: int,
    interval: float,
    sleep: Sleep = time.sleep,
) -> Instance:
    """Poll an instance until it is running or has failed.

    The instance is fetched up to ``attempts`` times, waiting ``interval``
    seconds before each fetch. Running out of attempts is not an error, the
    last observed instance is returned.

    :raises ProvisioningFailedException: if the instance reaches failed
    :raises RemoteException: if fetching the instance fails
    """

    def check() -> Instance:
        instance = client.instances.get(instance_id)
        LOG.debug(f"Instance {instance_id} is {instance.state!r}")
        if instance.state == InstanceState.FAILED:
            raise ProvisioningFailedException(instance_id)
        return instance

    retryer = tenacity.Retrying(
        wait=tenacity.wait_fixed(interval),
        stop=tenacity.stop_after_attempt(attempts),
        retry=tenacity.retry_if_result(
            lambda instance: instance.state != InstanceState.RUNNING
        ),
        retry_error_callback=_last_observed_instance,
        sleep=sleep,
    )
    sleep(interval)
    return retryer(check)


class InstanceResource:
    """Create, read, update and delete instances of one kind."""

    def __init__(self, kind: Kind, client: Client, sleep: Sleep = time.sleep):
        self.kind = Kind(kind)
        self.client = client
        self.sleep = sleep
        self.schema = instance_schema(self.kind)

    def _has(self, capability: Capability) -> bool:
        return has_capability(self.kind, capability)

    @staticmethod
    def _require_id(d: ResourceData) -> str:
        if not d.id:
            raise ValueError("Resource has no identity, it was never created")
        return d.id

    def _find_plan(self, d: ResourceData) -> Plan:
        request = PlanFindRequest(
            cloud=d.get("cloud"),
            region=d.get("region"),
            name=d.get("plan"),
            kind=self.kind.value,
        )
        LOG.debug(
            f"Resolving plan {request.name!r} of {request.kind} "
            f"in {request.cloud}/{request.region}"
        )
        plan = self.client.plans.find(request)
        LOG.debug(f"Resolved plan {request.name!r} to {plan.id}")
        return plan

    def create(self, d: ResourceData) -> None:
        """Create the instance and wait for it to come up.

        :raises PlanNotFoundException: if the plan cannot be resolved, no
                                       instance is created
        :raises ProvisioningFailedException: if the instance fails to
                                             provision, its identity is kept
        """
        plan = self._find_plan(d)
        request = InstanceCreateRequest(
            name=d.get("name"),
            whitelist=_to_strings(d.get("whitelist")),
            password=d.get("password"),
            plan_id=plan.id,
        )
        if self._has(Capability.EVICTION_POLICY):
            request.eviction_policy = d.get("eviction_policy") or None
        if self._has(Capability.LICENSE_KEY):
            request.license_key = d.get("license_key")

        instance = self.client.instances.create(request)
        LOG.debug(f"Created {self.kind} instance {instance.id}")
        d.set_id(instance.id)

        wait_for_instance(
            self.client,
            instance.id,
            CREATE_POLL_ATTEMPTS,
            CREATE_POLL_INTERVAL,
            self.sleep,
        )
        self.read(d)

    def update(self, d: ResourceData) -> None:
        """Send the changed fields and wait for the instance to settle."""
        instance_id = self._require_id(d)
        request = InstanceUpdateRequest(id=instance_id)

        if d.has_change("name"):
            request.name = d.get("name")
        if any(d.has_change(key) for key in PLAN_KEYS):
            request.plan_id = self._find_plan(d).id
        if d.has_change("password"):
            request.password = d.get("password")
        if d.has_change("enabled"):
            request.enabled = bool(d.get("enabled"))
        if d.has_change("whitelist"):
            request.whitelist = _to_strings(d.get("whitelist"))
        if self._has(Capability.EVICTION_POLICY) and d.has_change("eviction_policy"):
            request.eviction_policy = d.get("eviction_policy")
        if self._has(Capability.LICENSE_KEY) and d.has_change("license_key"):
            request.license_key = d.get("license_key")

        LOG.debug(
            f"Updating instance {instance_id}: "
            f"{sorted(request.model_dump(exclude_none=True))}"
        )
        self.client.instances.update(request)

        wait_for_instance(
            self.client,
            instance_id,
            UPDATE_POLL_ATTEMPTS,
            UPDATE_POLL_INTERVAL,
            self.sleep,
        )
        self.read(d)

    def read(self, d: ResourceData) -> None:
        """Write the computed fields of the instance back.

        Every field is attempted.

        :raises ComputedFieldsError: listing each field that could not be set
        """
        instance = self.client.instances.get(self._require_id(d))
        observed = (
            ("password", instance.password),
            ("replica_host", instance.connection_info.replica_host),
            ("master_host", instance.connection_info.master_host),
        )
        errors = []
        for key, value in observed:
            try:
                d.set(key, value)
            except FieldSetError as e:
                errors.append(e)
        if errors:
            raise ComputedFieldsError(
                f"Failed to write computed fields of instance {instance.id}", errors
            )

    def delete(self, d: ResourceData) -> None:
        """Delete the instance without waiting for it to be gone."""
        instance_id = self._require_id(d)
        self.client.instances.delete(instance_id)
        LOG.debug(f"Deleted instance {instance_id}")
        d.set_id(None)

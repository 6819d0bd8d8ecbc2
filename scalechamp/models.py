# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

"""Request and response models of the ScaleChamp API."""

import enum

import pydantic


class InstanceState(enum.StrEnum):
    """Instance states that end polling, any other state is transitional."""

    RUNNING = "running"
    FAILED = "failed"


class PlanFindRequest(pydantic.BaseModel):
    cloud: str
    region: str
    name: str
    kind: str


class Plan(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    id: str
    name: str = ""


class ConnectionInfo(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    master_host: str = ""
    replica_host: str = ""


class Instance(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore")

    id: str
    name: str = ""
    state: str = ""
    password: str = ""
    connection_info: ConnectionInfo = pydantic.Field(default_factory=ConnectionInfo)


class InstanceCreateRequest(pydantic.BaseModel):
    name: str
    whitelist: list[str] = pydantic.Field(default_factory=list)
    # Empty lets the service generate one
    password: str = ""
    plan_id: str
    eviction_policy: str | None = None
    license_key: str | None = None


class InstanceUpdateRequest(pydantic.BaseModel):
    """Partial update, None means "leave unchanged"."""

    id: str = pydantic.Field(exclude=True)
    name: str | None = None
    whitelist: list[str] | None = None
    password: str | None = None
    enabled: bool | None = None
    plan_id: str | None = None
    eviction_policy: str | None = None
    license_key: str | None = None


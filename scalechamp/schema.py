# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

"""Configuration schema of instance resources.

Every kind shares a common set of fields. Kinds then gain optional
capabilities, each contributing extra fields, through KIND_CAPABILITIES.
"""

import enum
import typing

import pydantic


class Kind(enum.StrEnum):
    """The product flavour of a managed instance."""

    REDIS = "redis"
    KEYDB = "keydb"
    KEYDB_PRO = "keydb-pro"
    PG = "pg"
    MYSQL = "mysql"

    @property
    def resource_type(self) -> str:
        """Return the resource type name, e.g. scalechamp_keydb_pro."""
        return "scalechamp_" + self.value.replace("-", "_")


class Capability(enum.Enum):
    EVICTION_POLICY = 1
    LICENSE_KEY = 2


# Kinds missing from this table have no optional capability
KIND_CAPABILITIES: dict[Kind, frozenset[Capability]] = {
    Kind.REDIS: frozenset({Capability.EVICTION_POLICY}),
    Kind.KEYDB: frozenset({Capability.EVICTION_POLICY}),
    Kind.KEYDB_PRO: frozenset({Capability.EVICTION_POLICY, Capability.LICENSE_KEY}),
}


def capabilities(kind: Kind) -> frozenset[Capability]:
    return KIND_CAPABILITIES.get(Kind(kind), frozenset())


def has_capability(kind: Kind, capability: Capability) -> bool:
    return capability in capabilities(kind)


class FieldType(enum.StrEnum):
    STRING = "string"
    BOOL = "bool"
    SET = "set"

    def zero_value(self) -> typing.Any:
        """Return the value of an unset field of this type."""
        match self:
            case FieldType.STRING:
                return ""
            case FieldType.BOOL:
                return False
            case FieldType.SET:
                return frozenset()

    def accepts(self, value: typing.Any) -> bool:
        match self:
            case FieldType.STRING:
                return isinstance(value, str)
            case FieldType.BOOL:
                return isinstance(value, bool)
            case FieldType.SET:
                return isinstance(value, (set, frozenset, list, tuple)) and all(
                    isinstance(item, str) for item in value
                )


class Field(pydantic.BaseModel):
    """Declaration of one configuration field."""

    model_config = pydantic.ConfigDict(frozen=True)

    type: FieldType
    required: bool = False
    optional: bool = False
    computed: bool = False
    default: typing.Any = None
    elem: FieldType | None = None
    description: str = ""

    @pydantic.model_validator(mode="after")
    def check_flags(self) -> "Field":
        if self.required and (self.optional or self.computed):
            raise ValueError("required fields cannot be optional or computed")
        if not (self.required or self.optional or self.computed):
            raise ValueError("field must be required, optional or computed")
        if self.default is not None and not self.optional:
            raise ValueError("only optional fields can have a default")
        if (self.type == FieldType.SET) != (self.elem is not None):
            raise ValueError("elem must be set for, and only for, set fields")
        return self

    @property
    def user_settable(self) -> bool:
        return self.required or self.optional


COMMON_FIELDS: dict[str, Field] = {
    "name": Field(
        type=FieldType.STRING, required=True, description="Name of the instance"
    ),
    "plan": Field(
        type=FieldType.STRING,
        required=True,
        description="Name of the plan, check in pricing",
    ),
    "cloud": Field(
        type=FieldType.STRING, required=True, description="Name of the cloud"
    ),
    "region": Field(
        type=FieldType.STRING,
        required=True,
        description="Name of the cloud region, see pricing table",
    ),
    "enabled": Field(
        type=FieldType.BOOL,
        optional=True,
        default=True,
        description="Set to false to stop the instance, true to bring it back up",
    ),
    "whitelist": Field(
        type=FieldType.SET,
        elem=FieldType.STRING,
        optional=True,
        description="IP whitelist set of strings",
    ),
    "password": Field(
        type=FieldType.STRING,
        optional=True,
        computed=True,
        description="Password generated by ScaleChamp or provided by user",
    ),
    "master_host": Field(
        type=FieldType.STRING, computed=True, description="Hostname of master node"
    ),
    "replica_host": Field(
        type=FieldType.STRING,
        optional=True,
        computed=True,
        description="Hostname of replica node",
    ),
}

CAPABILITY_FIELDS: dict[Capability, dict[str, Field]] = {
    Capability.EVICTION_POLICY: {
        "eviction_policy": Field(
            type=FieldType.STRING,
            optional=True,
            description="Eviction policy applied when memory is full",
        ),
    },
    Capability.LICENSE_KEY: {
        "license_key": Field(
            type=FieldType.STRING,
            required=True,
            description="License key of the KeyDB Pro instance",
        ),
    },
}


def instance_schema(kind: Kind) -> dict[str, Field]:
    """Build the configuration schema of an instance of the given kind.

    :param kind: the instance kind
    :return: mapping of field name to field declaration
    :raises ValueError: if kind is not a known Kind
    """
    schema = dict(COMMON_FIELDS)
    for capability in sorted(capabilities(kind), key=lambda c: c.value):
        schema.update(CAPABILITY_FIELDS[capability])
    return schema

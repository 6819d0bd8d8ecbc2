# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

import pydantic
import pytest

from scalechamp.schema import (
    COMMON_FIELDS,
    KIND_CAPABILITIES,
    Capability,
    Field,
    FieldType,
    Kind,
    capabilities,
    has_capability,
    instance_schema,
)

EVICTION_KINDS = {Kind.REDIS, Kind.KEYDB, Kind.KEYDB_PRO}


class TestInstanceSchema:
    @pytest.mark.parametrize("kind", list(Kind))
    def test_common_fields_always_present(self, kind):
        schema = instance_schema(kind)
        assert set(COMMON_FIELDS) <= set(schema)

    @pytest.mark.parametrize("kind", list(Kind))
    def test_license_key_only_for_premium(self, kind):
        schema = instance_schema(kind)
        if kind == Kind.KEYDB_PRO:
            assert schema["license_key"].required
        else:
            assert "license_key" not in schema

    @pytest.mark.parametrize("kind", list(Kind))
    def test_eviction_policy_only_for_eviction_engines(self, kind):
        schema = instance_schema(kind)
        if kind in EVICTION_KINDS:
            field = schema["eviction_policy"]
            assert field.optional
            assert not field.computed
        else:
            assert "eviction_policy" not in schema

    def test_deterministic(self):
        assert instance_schema(Kind.KEYDB_PRO) == instance_schema(Kind.KEYDB_PRO)
        assert list(instance_schema(Kind.KEYDB_PRO)) == list(
            instance_schema(Kind.KEYDB_PRO)
        )

    def test_does_not_mutate_common_fields(self):
        instance_schema(Kind.KEYDB_PRO)
        assert "license_key" not in COMMON_FIELDS
        assert "eviction_policy" not in COMMON_FIELDS

    def test_accepts_kind_value(self):
        assert "license_key" in instance_schema("keydb-pro")

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            instance_schema("memcached")

    def test_field_flags(self):
        schema = instance_schema(Kind.REDIS)
        assert schema["name"].required
        assert schema["enabled"].default is True
        assert schema["whitelist"].type == FieldType.SET
        assert schema["whitelist"].elem == FieldType.STRING
        assert schema["password"].optional and schema["password"].computed
        assert schema["master_host"].computed
        assert not schema["master_host"].user_settable


class TestCapabilities:
    def test_lookup_table(self):
        assert capabilities(Kind.KEYDB_PRO) == {
            Capability.EVICTION_POLICY,
            Capability.LICENSE_KEY,
        }
        assert capabilities(Kind.PG) == frozenset()
        assert Kind.MYSQL not in KIND_CAPABILITIES

    def test_has_capability(self):
        assert has_capability(Kind.KEYDB, Capability.EVICTION_POLICY)
        assert not has_capability(Kind.KEYDB, Capability.LICENSE_KEY)


class TestKind:
    @pytest.mark.parametrize(
        "kind,type_name",
        [
            (Kind.REDIS, "scalechamp_redis"),
            (Kind.KEYDB, "scalechamp_keydb"),
            (Kind.KEYDB_PRO, "scalechamp_keydb_pro"),
        ],
    )
    def test_resource_type(self, kind, type_name):
        assert kind.resource_type == type_name


class TestField:
    def test_required_cannot_be_computed(self):
        with pytest.raises(pydantic.ValidationError):
            Field(type=FieldType.STRING, required=True, computed=True)

    def test_needs_a_mode(self):
        with pytest.raises(pydantic.ValidationError):
            Field(type=FieldType.STRING)

    def test_default_only_when_optional(self):
        with pytest.raises(pydantic.ValidationError):
            Field(type=FieldType.BOOL, required=True, default=True)

    def test_set_needs_elem(self):
        with pytest.raises(pydantic.ValidationError):
            Field(type=FieldType.SET, optional=True)

    def test_frozen(self):
        field = Field(type=FieldType.STRING, optional=True)
        with pytest.raises(pydantic.ValidationError):
            field.optional = False

    @pytest.mark.parametrize(
        "field_type,value,accepted",
        [
            (FieldType.STRING, "x", True),
            (FieldType.STRING, 1, False),
            (FieldType.BOOL, False, True),
            (FieldType.BOOL, "false", False),
            (FieldType.SET, {"a"}, True),
            (FieldType.SET, ["a", 1], False),
        ],
    )
    def test_accepts(self, field_type, value, accepted):
        assert field_type.accepts(value) is accepted

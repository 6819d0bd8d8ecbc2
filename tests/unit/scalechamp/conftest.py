# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

from unittest.mock import Mock

import pytest

from scalechamp.models import ConnectionInfo, Instance, Plan


def _make_instance(
    state: str = "running",
    id: str = "inst-1",
    password: str = "s3cret",
    master_host: str = "master.example.com",
    replica_host: str = "replica.example.com",
) -> Instance:
    return Instance(
        id=id,
        name="cache",
        state=state,
        password=password,
        connection_info=ConnectionInfo(
            master_host=master_host, replica_host=replica_host
        ),
    )


@pytest.fixture
def make_instance():
    """Factory of API instances, running and fully connected by default."""
    return _make_instance


@pytest.fixture
def basic_client(make_instance):
    """API client answering with a running instance by default."""
    client = Mock()
    client.plans.find.return_value = Plan(id="plan-1", name="hobby")
    client.instances.create.return_value = make_instance(state="provisioning")
    client.instances.update.return_value = make_instance(state="updating")
    client.instances.get.return_value = make_instance()
    client.instances.delete.return_value = None
    return client


@pytest.fixture
def sleep():
    """Stand-in for time.sleep recording the requested delays."""
    return Mock()


@pytest.fixture
def base_config():
    return {
        "name": "cache",
        "plan": "hobby",
        "cloud": "aws",
        "region": "eu-west-1",
        "whitelist": {"10.0.0.2", "10.0.0.1"},
    }

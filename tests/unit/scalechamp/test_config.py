# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

import pytest

from scalechamp.config import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, load_config
from scalechamp.errors import ConfigurationException


def test_defaults():
    config = load_config(environ={"SCALECHAMP_TOKEN": "abc"})
    assert config.endpoint == DEFAULT_ENDPOINT
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.token.get_secret_value() == "abc"


def test_token_is_not_printed():
    config = load_config(environ={"SCALECHAMP_TOKEN": "abc"})
    assert "abc" not in repr(config)


def test_missing_token():
    with pytest.raises(ConfigurationException, match="token"):
        load_config(environ={})


def test_file_and_environment(tmp_path):
    path = tmp_path / "scalechamp.yaml"
    path.write_text(
        "endpoint: https://api.example.com/\ntoken: from-file\ntimeout: 5\n"
    )

    config = load_config(path, environ={"SCALECHAMP_TOKEN": "from-env"})

    assert config.endpoint == "https://api.example.com"
    assert config.timeout == 5
    assert config.token.get_secret_value() == "from-env"


def test_file_not_a_mapping(tmp_path):
    path = tmp_path / "scalechamp.yaml"
    path.write_text("- token\n")

    with pytest.raises(ConfigurationException, match="mapping"):
        load_config(path, environ={})


def test_file_missing(tmp_path):
    with pytest.raises(ConfigurationException, match="Cannot read"):
        load_config(tmp_path / "missing.yaml", environ={})


@pytest.mark.parametrize(
    "environ",
    [
        {"SCALECHAMP_TOKEN": "abc", "SCALECHAMP_ENDPOINT": "api.example.com"},
        {"SCALECHAMP_TOKEN": "abc", "SCALECHAMP_TIMEOUT": "0"},
        {"SCALECHAMP_TOKEN": "abc", "SCALECHAMP_TIMEOUT": "soon"},
    ],
)
def test_invalid_values(environ):
    with pytest.raises(ConfigurationException):
        load_config(environ=environ)


def test_unknown_key(tmp_path):
    path = tmp_path / "scalechamp.yaml"
    path.write_text("token: abc\nregion: eu\n")

    with pytest.raises(ConfigurationException, match="region"):
        load_config(path, environ={})

"""Shared fixtures for tests."""

import pytest

import aws_config_mod
from aws_config_mod import ConfigFile, CredentialsFile


SAMPLE_CONFIG = """\
[default]                 # section header, optional comment
region = us-west-2
output=json

[profile A]
credential_source = Ec2InstanceMetadata
endpoint_url = https://example.com/

[services myservices]
ec2 =
  endpoint_url = http://localhost:8000
"""

SAMPLE_CREDENTIALS = """\
[default]
aws_access_key_id = AKIDEXAMPLE
aws_secret_access_key = secret # rotate monthly

[dev]
aws_access_key_id = AKIDDEV
"""


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_CONFIG


@pytest.fixture
def sample_config() -> ConfigFile:
    return aws_config_mod.parse(SAMPLE_CONFIG)


@pytest.fixture
def credentials_text() -> str:
    return SAMPLE_CREDENTIALS


@pytest.fixture
def credentials() -> CredentialsFile:
    return aws_config_mod.parse_credentials(SAMPLE_CREDENTIALS)

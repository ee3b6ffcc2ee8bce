"""
tests/conftest.py - shared pytest fixtures

Fake AWS credentials, botocore error helpers and moto backed clients.

Usage:
    def test_something(moto_ec2):
        moto_ec2.create_volume(AvailabilityZone="us-east-1a", Size=10)
"""

import sys
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

# make the project root importable without installing
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

TEST_REGION = "us-east-1"
# one of moto's bundled AMIs
TEST_AMI_ID = "ami-12c6146b"


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Fake credentials so no test ever reaches a real account"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)
    for name in ("MAX_ATTEMPTS", "RETRY_MODE", "CONNECT_TIMEOUT", "READ_TIMEOUT"):
        monkeypatch.delenv(f"AWSTOOLS_{name}", raising=False)


# =============================================================================
# Helpers
# =============================================================================


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation: str = "TestOperation",
) -> ClientError:
    """ClientError helper"""
    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation,
    )


def tag_entry(resource_id: str, key: str, value: str) -> Dict[str, Any]:
    """DescribeTags entry"""
    return {"ResourceId": resource_id, "ResourceType": "volume", "Key": key, "Value": value}


# =============================================================================
# Fake clients
# =============================================================================


@pytest.fixture
def mock_ec2_client():
    """EC2 client without any resources"""
    mock_client = MagicMock()
    mock_client.describe_volumes.return_value = {"Volumes": []}
    mock_client.describe_tags.return_value = {"Tags": []}
    mock_client.describe_instances.return_value = {"Reservations": []}
    return mock_client


@pytest.fixture
def mock_route53_client():
    """Route53 client without any zones"""
    mock_client = MagicMock()
    mock_client.list_hosted_zones.return_value = {"HostedZones": [], "IsTruncated": False}
    mock_client.list_resource_record_sets.return_value = {"ResourceRecordSets": [], "IsTruncated": False}
    return mock_client


# =============================================================================
# moto
# =============================================================================


@pytest.fixture
def moto_ec2():
    """EC2 client backed by moto"""
    with mock_aws():
        yield boto3.client("ec2", region_name=TEST_REGION)


@pytest.fixture
def moto_route53():
    """Route53 client backed by moto"""
    with mock_aws():
        yield boto3.client("route53", region_name=TEST_REGION)

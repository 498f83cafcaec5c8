"""Pytest fixtures for CDK construct and verification tests."""

import os
from collections.abc import Iterator

import aws_cdk as cdk
import boto3
import pytest
from moto import mock_aws

ACCOUNT = "123456789012"
REGION = "us-east-1"


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing."""
  return cdk.App()


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(
    app, "TestStack", env=cdk.Environment(account=ACCOUNT, region=REGION)
  )


@pytest.fixture
def aws_credentials() -> None:
  """Set fake AWS credentials for moto."""
  os.environ["AWS_ACCESS_KEY_ID"] = "testing"
  os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
  os.environ["AWS_SECURITY_TOKEN"] = "testing"
  os.environ["AWS_SESSION_TOKEN"] = "testing"
  os.environ["AWS_DEFAULT_REGION"] = REGION


@pytest.fixture
def route53(aws_credentials: None) -> Iterator[object]:
  """Mocked Route 53 client."""
  with mock_aws():
    yield boto3.client("route53", region_name=REGION)

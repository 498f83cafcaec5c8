#!/usr/bin/env python3
"""CDK application entry point for static website infrastructure."""

import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk
import boto3

from static_site_infra.config import Config
from static_site_infra.stacks.site_stack import StaticSiteStack


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def load_config(app: cdk.App) -> Config:
  """Load configuration from CDK context.

  ``-c root_domain=example.com`` deploys a single site with default settings;
  otherwise sites are read from the YAML file named by ``-c config=...``.
  """
  root_domain = app.node.try_get_context("root_domain")
  if root_domain:
    return Config.for_domain(root_domain)

  config_path = app.node.try_get_context("config") or "sites.yaml"
  return Config.from_yaml(Path(config_path))


def add_site_stacks(
  app: cdk.App, config: Config, account_id: str
) -> list[StaticSiteStack]:
  """Create a stack for each configured site."""
  stacks: list[StaticSiteStack] = []
  for site in config.sites:
    # Zone lookups require an explicit account and region
    stacks.append(
      StaticSiteStack(
        app,
        site.stack_name,
        site_config=site,
        env=cdk.Environment(
          account=account_id,
          region=site.region,
        ),
        description=f"Static website infrastructure for {site.root_domain}",
      )
    )
  return stacks


def main() -> None:
  """Create CDK app with stacks for each configured site."""
  app = cdk.App()
  config = load_config(app)
  add_site_stacks(app, config, get_account_id())
  app.synth()


if __name__ == "__main__":
  main()

"""CDK stack for a single static website."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from static_site_infra.cdk_constructs import StaticSiteConstruct
from static_site_infra.config import SiteConfig


class StaticSiteStack(cdk.Stack):
  """Stack for a single static website."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.site = StaticSiteConstruct(
      self,
      "Site",
      domain_name=site_config.root_domain,
      hosted_zone_id=site_config.hosted_zone_id,
      cache_policy=site_config.cache_policy,
      minimum_protocol_version=site_config.minimum_protocol_version,
      price_class=site_config.price_class,
      evaluate_target_health=site_config.evaluate_target_health,
      removal_policy=site_config.removal_policy,
    )

    # Tag resources with owner info
    if site_config.owner:
      cdk.Tags.of(self).add("Owner", site_config.owner)
    if site_config.email:
      cdk.Tags.of(self).add("OwnerEmail", site_config.email)
    cdk.Tags.of(self).add("Project", "static-sites")
    cdk.Tags.of(self).add("Domain", site_config.root_domain)

"""Configuration loader for static site deployments."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from aws_cdk import RemovalPolicy
from aws_cdk import aws_cloudfront as cloudfront

# Managed cache policy names as CloudFront reports them, mapped to the
# matching CachePolicy attribute.
MANAGED_CACHE_POLICIES = {
  "Managed-CachingOptimized": "CACHING_OPTIMIZED",
  "Managed-CachingOptimizedForUncompressedObjects": (
    "CACHING_OPTIMIZED_FOR_UNCOMPRESSED_OBJECTS"
  ),
  "Managed-CachingDisabled": "CACHING_DISABLED",
  "Managed-Amplify": "AMPLIFY",
  "Managed-Elemental-MediaPackage": "ELEMENTAL_MEDIA_PACKAGE",
}

PROTOCOL_VERSIONS = {
  "TLSv1": cloudfront.SecurityPolicyProtocol.TLS_V1_2016,
  "TLSv1_2016": cloudfront.SecurityPolicyProtocol.TLS_V1_2016,
  "TLSv1.1_2016": cloudfront.SecurityPolicyProtocol.TLS_V1_1_2016,
  "TLSv1.2_2018": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2018,
  "TLSv1.2_2019": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2019,
  "TLSv1.2_2021": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021,
}

PRICE_CLASSES = {
  "PriceClass_100": cloudfront.PriceClass.PRICE_CLASS_100,
  "PriceClass_200": cloudfront.PriceClass.PRICE_CLASS_200,
  "PriceClass_All": cloudfront.PriceClass.PRICE_CLASS_ALL,
}

REMOVAL_POLICIES = {
  "retain": RemovalPolicy.RETAIN,
  "destroy": RemovalPolicy.DESTROY,
  "snapshot": RemovalPolicy.SNAPSHOT,
}

# CloudFront only serves ACM certificates issued in us-east-1.
CERTIFICATE_REGION = "us-east-1"

_LABEL = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")


def normalize_domain(domain: str) -> str:
  """Lowercase a domain name, drop a trailing dot and validate it.

  Raises:
    ValueError: If the name is not a valid multi-label DNS name
  """
  name = domain.strip().lower().rstrip(".")
  labels = name.split(".")
  valid_labels = all(_LABEL.match(label) for label in labels)
  if len(name) > 253 or len(labels) < 2 or not valid_labels:
    raise ValueError(f"Invalid root domain: {domain!r}")
  return name


@dataclass
class SiteConfig:
  """Configuration for a single static site."""

  root_domain: str
  owner: str = ""
  email: str = ""
  hosted_zone_id: str | None = None
  region: str = CERTIFICATE_REGION
  cache_policy: str = "Managed-CachingOptimized"
  minimum_protocol_version: cloudfront.SecurityPolicyProtocol = (
    cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021
  )
  price_class: cloudfront.PriceClass = cloudfront.PriceClass.PRICE_CLASS_ALL
  evaluate_target_health: bool = True
  removal_policy: RemovalPolicy = RemovalPolicy.RETAIN

  def __post_init__(self) -> None:
    self.root_domain = normalize_domain(self.root_domain)
    if self.cache_policy not in MANAGED_CACHE_POLICIES:
      raise ValueError(f"Unknown cache policy: {self.cache_policy!r}")
    if self.region != CERTIFICATE_REGION:
      raise ValueError(
        f"Unsupported region {self.region!r}: the certificate and stack must "
        f"be deployed to {CERTIFICATE_REGION}"
      )

  @property
  def stack_name(self) -> str:
    return f"StaticSite-{self.root_domain.replace('.', '-')}"


def _lookup(table: dict[str, Any], value: str, what: str) -> Any:
  try:
    return table[value]
  except KeyError:
    raise ValueError(f"Unknown {what}: {value!r}") from None


@dataclass
class Config:
  """Multi-site configuration."""

  sites: list[SiteConfig] = field(default_factory=list)

  @classmethod
  def for_domain(cls, root_domain: str, **overrides: object) -> "Config":
    """Build a single-site configuration from a bare root domain."""
    return cls(sites=[_site_from_dict({"domain": root_domain, **overrides})])

  @classmethod
  def from_yaml(cls, path: Path | str = "sites.yaml") -> "Config":
    """Load configuration from YAML file."""
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    defaults = data.get("defaults", {})
    sites: list[SiteConfig] = []

    for site_data in data.get("sites", []):
      # Merge defaults with site-specific config
      sites.append(_site_from_dict({**defaults, **site_data}))

    return cls(sites=sites)


def _site_from_dict(merged: dict[str, Any]) -> SiteConfig:
  """Convert a merged YAML mapping into a SiteConfig."""
  return SiteConfig(
    root_domain=merged["domain"],
    owner=merged.get("owner", ""),
    email=merged.get("email", ""),
    hosted_zone_id=merged.get("hosted_zone_id"),
    region=merged.get("region", CERTIFICATE_REGION),
    cache_policy=merged.get("cache_policy", "Managed-CachingOptimized"),
    minimum_protocol_version=_lookup(
      PROTOCOL_VERSIONS,
      merged.get("minimum_protocol_version", "TLSv1.2_2021"),
      "minimum protocol version",
    ),
    price_class=_lookup(
      PRICE_CLASSES, merged.get("price_class", "PriceClass_All"), "price class"
    ),
    evaluate_target_health=merged.get("evaluate_target_health", True),
    removal_policy=_lookup(
      REMOVAL_POLICIES,
      str(merged.get("removal_policy", "retain")).lower(),
      "removal policy",
    ),
  )

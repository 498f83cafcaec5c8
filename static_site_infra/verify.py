"""Post-deployment checks for a static site.

Confirms the end state a deployment should reach: exactly one public hosted
zone for the domain, an issued certificate covering the domain and its
wildcard, a deployed CloudFront distribution serving the domain with that
certificate, and an alias A record pointing at that distribution.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

import boto3

from static_site_infra.config import normalize_domain


class ZoneLookupError(Exception):
  """Raised when a domain does not resolve to exactly one public zone."""


@dataclass
class SiteStatus:
  """Observed state of a deployed static site."""

  domain: str
  hosted_zone_id: str | None = None
  certificate_arn: str | None = None
  distribution_id: str | None = None
  distribution_domain_name: str | None = None
  distribution_status: str | None = None
  alias_target: str | None = None
  problems: list[str] = field(default_factory=list)

  @property
  def ok(self) -> bool:
    return not self.problems

  def to_dict(self) -> dict[str, Any]:
    return {**asdict(self), "ok": self.ok}


def find_public_zone(route53: Any, domain: str) -> str:
  """Resolve a domain to the ID of its single public hosted zone.

  Raises:
    ZoneLookupError: If no public zone or more than one matches
  """
  fqdn = f"{domain}."
  response = route53.list_hosted_zones_by_name(DNSName=fqdn)
  matches = [
    zone["Id"].split("/")[-1]
    for zone in response.get("HostedZones", [])
    if zone["Name"] == fqdn and not zone.get("Config", {}).get("PrivateZone", False)
  ]

  if not matches:
    raise ZoneLookupError(f"No public hosted zone found for {domain}")
  if len(matches) > 1:
    raise ZoneLookupError(
      f"Found {len(matches)} public hosted zones for {domain}: {', '.join(matches)}"
    )
  return matches[0]


def find_issued_certificates(acm: Any, domain: str) -> list[str]:
  """Return ARNs of issued certificates covering a domain and its wildcard."""
  wildcard = f"*.{domain}"
  arns: list[str] = []

  paginator = acm.get_paginator("list_certificates")
  for page in paginator.paginate(CertificateStatuses=["ISSUED"]):
    for summary in page.get("CertificateSummaryList", []):
      if summary.get("DomainName") != domain:
        continue
      arn = summary["CertificateArn"]
      detail = acm.describe_certificate(CertificateArn=arn)["Certificate"]
      if wildcard in detail.get("SubjectAlternativeNames", []):
        arns.append(arn)
  return arns


def find_distribution(cloudfront: Any, domain: str) -> dict[str, Any] | None:
  """Return the distribution summary that serves a domain alias."""
  paginator = cloudfront.get_paginator("list_distributions")
  for page in paginator.paginate():
    for item in page.get("DistributionList", {}).get("Items", []):
      if domain in item.get("Aliases", {}).get("Items", []):
        return dict(item)
  return None


def find_viewer_certificate(cloudfront: Any, distribution_id: str) -> str | None:
  """Return the ACM certificate ARN a distribution presents to viewers."""
  response = cloudfront.get_distribution_config(Id=distribution_id)
  viewer = response["DistributionConfig"].get("ViewerCertificate", {})
  return viewer.get("ACMCertificateArn")


def find_alias_target(route53: Any, hosted_zone_id: str, domain: str) -> str | None:
  """Return the DNS name an apex A alias record points at, if any."""
  fqdn = f"{domain}."
  response = route53.list_resource_record_sets(
    HostedZoneId=hosted_zone_id,
    StartRecordName=fqdn,
    StartRecordType="A",
    MaxItems="1",
  )
  for record in response.get("ResourceRecordSets", []):
    if record["Name"] == fqdn and record["Type"] == "A" and "AliasTarget" in record:
      return str(record["AliasTarget"]["DNSName"]).rstrip(".").lower()
  return None


def check_site(domain: str, session: Any | None = None) -> SiteStatus:
  """Check the deployed state of a site against its expected end state."""
  domain = normalize_domain(domain)
  session = session or boto3.session.Session()
  status = SiteStatus(domain=domain)

  route53 = session.client("route53")
  # CloudFront only uses certificates from us-east-1
  acm = session.client("acm", region_name="us-east-1")
  cloudfront = session.client("cloudfront")

  try:
    status.hosted_zone_id = find_public_zone(route53, domain)
  except ZoneLookupError as e:
    status.problems.append(str(e))

  served_arn = None
  distribution = find_distribution(cloudfront, domain)
  if distribution is None:
    status.problems.append(f"No CloudFront distribution serves {domain}")
  else:
    status.distribution_id = distribution["Id"]
    status.distribution_domain_name = distribution["DomainName"]
    status.distribution_status = distribution["Status"]
    if distribution["Status"] != "Deployed":
      status.problems.append(
        f"Distribution {distribution['Id']} is {distribution['Status']}, not Deployed"
      )
    served_arn = find_viewer_certificate(cloudfront, distribution["Id"])

  certificates = find_issued_certificates(acm, domain)
  if not certificates:
    status.problems.append(f"No issued certificate covers {domain} and *.{domain}")
  elif distribution is None:
    status.certificate_arn = certificates[0]
  elif served_arn in certificates:
    status.certificate_arn = served_arn
  else:
    # Only the certificate the distribution serves counts
    status.certificate_arn = served_arn
    status.problems.append(
      f"Distribution {distribution['Id']} serves certificate {served_arn or 'none'}, "
      f"not an issued certificate covering {domain} and *.{domain}"
    )

  if status.hosted_zone_id:
    status.alias_target = find_alias_target(route53, status.hosted_zone_id, domain)
    if status.alias_target is None:
      status.problems.append(f"No alias A record for {domain}")
    elif (
      status.distribution_domain_name
      and status.alias_target != status.distribution_domain_name.lower()
    ):
      status.problems.append(
        f"Alias record points at {status.alias_target}, "
        f"expected {status.distribution_domain_name}"
      )

  return status

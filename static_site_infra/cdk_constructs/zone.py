"""Route 53 hosted zone reference."""

from aws_cdk import aws_route53 as route53
from constructs import Construct


class DomainZone(Construct):
  """Existing public hosted zone for the root domain.

  The zone is never created or destroyed here. With a zone ID it is imported
  directly, otherwise it is resolved by name at synth time, which fails when
  no public zone or more than one matches.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    hosted_zone_id: str | None = None,
  ) -> None:
    super().__init__(scope, id)

    if hosted_zone_id:
      self.hosted_zone = route53.HostedZone.from_hosted_zone_attributes(
        self,
        "HostedZone",
        hosted_zone_id=hosted_zone_id,
        zone_name=domain_name,
      )
    else:
      self.hosted_zone = route53.HostedZone.from_lookup(
        self,
        "HostedZone",
        domain_name=domain_name,
        private_zone=False,
      )

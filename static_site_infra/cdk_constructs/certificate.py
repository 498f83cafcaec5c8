"""ACM certificate with DNS validation."""

from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_route53 as route53
from constructs import Construct


class DnsValidatedCertificate(Construct):
  """ACM certificate with DNS validation (no email approval needed).

  CloudFormation requests the certificate, writes the challenge CNAME into
  the zone and holds the resource in CREATE_IN_PROGRESS until ACM issues it,
  so anything consuming ``certificate_arn`` waits for issuance. A change of
  names replaces the certificate: the new one is issued before the old one
  is deleted in the cleanup phase.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    hosted_zone: route53.IHostedZone,
    include_wildcard: bool = True,
  ) -> None:
    super().__init__(scope, id)

    subject_alternative_names = [f"*.{domain_name}"] if include_wildcard else None

    self.certificate = acm.Certificate(
      self,
      "Certificate",
      domain_name=domain_name,
      subject_alternative_names=subject_alternative_names,
      validation=acm.CertificateValidation.from_dns(hosted_zone),
    )

  @property
  def certificate_arn(self) -> str:
    return self.certificate.certificate_arn

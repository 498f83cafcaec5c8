"""Main composite construct for complete static website infrastructure."""

from aws_cdk import CfnOutput, RemovalPolicy
from aws_cdk import aws_cloudfront as cloudfront
from constructs import Construct

from .certificate import DnsValidatedCertificate
from .distribution import SiteDistribution
from .dns import AliasRecord
from .storage import OriginBucket
from .zone import DomainZone


class StaticSiteConstruct(Construct):
  """Complete static website infrastructure.

  Creates, leaves first:
  - Reference to the existing public Route 53 hosted zone
  - ACM certificate for the domain and its wildcard (DNS validated)
  - Private S3 origin bucket with website configuration
  - CloudFront distribution behind an origin access control
  - Route 53 alias A record pointing at the distribution
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    hosted_zone_id: str | None = None,
    cache_policy: str = "Managed-CachingOptimized",
    minimum_protocol_version: cloudfront.SecurityPolicyProtocol = (
      cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021
    ),
    price_class: cloudfront.PriceClass = cloudfront.PriceClass.PRICE_CLASS_ALL,
    evaluate_target_health: bool = True,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
  ) -> None:
    super().__init__(scope, id)

    self.zone = DomainZone(
      self,
      "Zone",
      domain_name=domain_name,
      hosted_zone_id=hosted_zone_id,
    )

    self.certificate = DnsValidatedCertificate(
      self,
      "Certificate",
      domain_name=domain_name,
      hosted_zone=self.zone.hosted_zone,
    )

    # Bucket name must be exactly the domain name
    self.bucket = OriginBucket(
      self,
      "Origin",
      bucket_name=domain_name,
      removal_policy=removal_policy,
    )

    self.distribution = SiteDistribution(
      self,
      "Distribution",
      bucket=self.bucket.bucket,
      certificate=self.certificate.certificate,
      domain_name=domain_name,
      cache_policy=cache_policy,
      minimum_protocol_version=minimum_protocol_version,
      price_class=price_class,
    )

    self.alias = AliasRecord(
      self,
      "Alias",
      domain_name=domain_name,
      hosted_zone=self.zone.hosted_zone,
      distribution=self.distribution.distribution,
      evaluate_target_health=evaluate_target_health,
    )

    # Outputs
    CfnOutput(
      self,
      "BucketName",
      value=self.bucket.bucket.bucket_name,
      description="S3 bucket name",
    )
    CfnOutput(
      self,
      "CertificateArn",
      value=self.certificate.certificate_arn,
      description="Issued ACM certificate ARN",
    )
    CfnOutput(
      self,
      "DistributionId",
      value=self.distribution.distribution.distribution_id,
      description="CloudFront distribution ID",
    )
    CfnOutput(
      self,
      "DistributionDomainName",
      value=self.distribution.distribution.distribution_domain_name,
      description="CloudFront distribution domain name",
    )
    CfnOutput(
      self,
      "HostedZoneId",
      value=self.zone.hosted_zone.hosted_zone_id,
      description="Route 53 hosted zone ID",
    )

"""Route 53 alias record for the CloudFront distribution."""

from typing import cast

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as targets
from constructs import Construct


class AliasRecord(Construct):
  """Apex A record aliased to a CloudFront distribution."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    hosted_zone: route53.IHostedZone,
    distribution: cloudfront.IDistribution,
    evaluate_target_health: bool = True,
  ) -> None:
    super().__init__(scope, id)

    self.record = route53.ARecord(
      self,
      "ARecord",
      zone=hosted_zone,
      record_name=domain_name,
      target=route53.RecordTarget.from_alias(targets.CloudFrontTarget(distribution)),
    )

    # CloudFrontTarget has no health evaluation option
    cfn_record = cast(route53.CfnRecordSet, self.record.node.default_child)
    cfn_record.add_property_override(
      "AliasTarget.EvaluateTargetHealth", evaluate_target_health
    )

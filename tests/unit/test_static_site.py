"""Tests for the StaticSiteConstruct."""

import json

import pytest
from aws_cdk import App, Environment, RemovalPolicy, Stack
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from aws_cdk.assertions import Match, Template

from static_site_infra.cdk_constructs import (
  DnsValidatedCertificate,
  StaticSiteConstruct,
)

ENV = Environment(account="123456789012", region="us-east-1")
CACHING_OPTIMIZED_ID = "658327ea-f89d-4fab-a63d-7e88639e58f6"
CACHING_DISABLED_ID = "4135ea2d-6df8-44a3-9df3-4b5a84be39ad"


def synth_site(**kwargs: object) -> Template:
  app = App()
  stack = Stack(app, "TestStack", env=ENV)
  options: dict[str, object] = {
    "domain_name": "example.com",
    "hosted_zone_id": "Z123EXAMPLE",
    **kwargs,
  }
  StaticSiteConstruct(stack, "TestSite", **options)  # type: ignore[arg-type]
  return Template.from_stack(stack)


def logical_id(template: Template, resource_type: str) -> str:
  resources = template.find_resources(resource_type)
  assert len(resources) == 1
  return next(iter(resources))


class TestStaticSiteConstruct:
  """Test the main StaticSiteConstruct."""

  @pytest.fixture
  def template(self) -> Template:
    """Create a template with default options."""
    return synth_site()

  def test_creates_private_website_bucket(self, template: Template) -> None:
    """Verify the bucket is named after the domain and blocks public access."""
    template.has_resource_properties(
      "AWS::S3::Bucket",
      {
        "BucketName": "example.com",
        "WebsiteConfiguration": {"IndexDocument": "index.html"},
        "PublicAccessBlockConfiguration": {
          "BlockPublicAcls": True,
          "BlockPublicPolicy": True,
          "IgnorePublicAcls": True,
          "RestrictPublicBuckets": True,
        },
      },
    )

  def test_bucket_retained_by_default(self, template: Template) -> None:
    """Verify the bucket survives stack deletion by default."""
    template.has_resource(
      "AWS::S3::Bucket",
      {"DeletionPolicy": "Retain", "UpdateReplacePolicy": "Retain"},
    )

  def test_requests_certificate_with_wildcard(self, template: Template) -> None:
    """Verify the certificate covers the apex and its wildcard."""
    template.resource_count_is("AWS::CertificateManager::Certificate", 1)
    template.has_resource_properties(
      "AWS::CertificateManager::Certificate",
      {
        "DomainName": "example.com",
        "SubjectAlternativeNames": ["*.example.com"],
        "ValidationMethod": "DNS",
      },
    )

  def test_certificate_validated_in_zone(self, template: Template) -> None:
    """Verify the challenge record is written into the site's hosted zone."""
    template.has_resource_properties(
      "AWS::CertificateManager::Certificate",
      {
        "DomainValidationOptions": Match.array_with(
          [{"DomainName": "example.com", "HostedZoneId": "Z123EXAMPLE"}]
        ),
      },
    )

  def test_zone_referenced_not_created(self, template: Template) -> None:
    """Verify the existing zone is used rather than a new one."""
    template.resource_count_is("AWS::Route53::HostedZone", 0)

  def test_without_wildcard(self, stack: Stack) -> None:
    """Verify the wildcard name can be left off the certificate."""
    zone = route53.HostedZone.from_hosted_zone_attributes(
      stack, "Zone", hosted_zone_id="Z123EXAMPLE", zone_name="example.com"
    )
    DnsValidatedCertificate(
      stack,
      "Certificate",
      domain_name="example.com",
      hosted_zone=zone,
      include_wildcard=False,
    )
    template = Template.from_stack(stack)
    template.has_resource_properties(
      "AWS::CertificateManager::Certificate",
      {"DomainName": "example.com", "SubjectAlternativeNames": Match.absent()},
    )

  def test_origin_access_control_signs_always(self, template: Template) -> None:
    """Verify the OAC signs every origin request with SigV4."""
    template.has_resource_properties(
      "AWS::CloudFront::OriginAccessControl",
      {
        "OriginAccessControlConfig": Match.object_like(
          {
            "OriginAccessControlOriginType": "s3",
            "SigningBehavior": "always",
            "SigningProtocol": "sigv4",
          }
        ),
      },
    )

  def test_distribution_uses_validated_certificate(self, template: Template) -> None:
    """Verify the distribution waits for the issued certificate."""
    certificate_id = logical_id(template, "AWS::CertificateManager::Certificate")
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {
            "Aliases": ["example.com"],
            "DefaultRootObject": "index.html",
            "ViewerCertificate": {
              "AcmCertificateArn": {"Ref": certificate_id},
              "SslSupportMethod": "sni-only",
              "MinimumProtocolVersion": "TLSv1.2_2021",
            },
          }
        ),
      },
    )

  def test_distribution_behavior(self, template: Template) -> None:
    """Verify GET/HEAD only, HTTPS redirect and the managed cache policy."""
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {
            "DefaultCacheBehavior": Match.object_like(
              {
                "AllowedMethods": ["GET", "HEAD"],
                "CachedMethods": ["GET", "HEAD"],
                "ViewerProtocolPolicy": "redirect-to-https",
                "CachePolicyId": CACHING_OPTIMIZED_ID,
              }
            ),
          }
        ),
      },
    )

  def test_distribution_origin_uses_access_control(self, template: Template) -> None:
    """Verify the single origin is signed by the origin access control."""
    oac_id = logical_id(template, "AWS::CloudFront::OriginAccessControl")
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {
            "Origins": [
              Match.object_like(
                {"OriginAccessControlId": {"Fn::GetAtt": [oac_id, "Id"]}}
              )
            ],
          }
        ),
      },
    )

  def test_bucket_policy_scoped_to_distribution(self, template: Template) -> None:
    """Verify only this distribution may read objects from the bucket."""
    bucket_id = logical_id(template, "AWS::S3::Bucket")
    distribution_id = logical_id(template, "AWS::CloudFront::Distribution")

    policies = template.find_resources("AWS::S3::BucketPolicy")
    statements = [
      statement
      for policy in policies.values()
      for statement in policy["Properties"]["PolicyDocument"]["Statement"]
      if statement.get("Principal") == {"Service": "cloudfront.amazonaws.com"}
    ]
    assert len(statements) == 1
    statement = statements[0]

    assert statement["Effect"] == "Allow"
    assert statement["Action"] == "s3:GetObject"
    assert bucket_id in json.dumps(statement["Resource"])
    assert statement["Resource"]["Fn::Join"][1][-1] == "/*"
    source_arn = statement["Condition"]["StringEquals"]["AWS:SourceArn"]
    assert {"Ref": distribution_id} in source_arn["Fn::Join"][1]

  def test_alias_record(self, template: Template) -> None:
    """Verify the apex A record aliases the distribution with health evaluation."""
    distribution_id = logical_id(template, "AWS::CloudFront::Distribution")
    template.resource_count_is("AWS::Route53::RecordSet", 1)
    template.has_resource_properties(
      "AWS::Route53::RecordSet",
      {
        "Name": "example.com.",
        "Type": "A",
        "HostedZoneId": "Z123EXAMPLE",
        "AliasTarget": Match.object_like(
          {
            "DNSName": {"Fn::GetAtt": [distribution_id, "DomainName"]},
            "EvaluateTargetHealth": True,
          }
        ),
      },
    )

  def test_outputs(self, template: Template) -> None:
    """Verify identifiers are exported for parent configurations."""
    outputs = template.find_outputs("*")
    for name in (
      "BucketName",
      "CertificateArn",
      "DistributionId",
      "DistributionDomainName",
      "HostedZoneId",
    ):
      assert any(name in key for key in outputs), name


class TestStaticSiteOptions:
  """Test StaticSiteConstruct configuration options."""

  def test_cache_policy_and_protocol(self) -> None:
    """Verify cache policy and TLS version follow the configuration."""
    template = synth_site(
      cache_policy="Managed-CachingDisabled",
      minimum_protocol_version=cloudfront.SecurityPolicyProtocol.TLS_V1_2_2019,
      price_class=cloudfront.PriceClass.PRICE_CLASS_100,
    )
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": Match.object_like(
          {
            "DefaultCacheBehavior": Match.object_like(
              {"CachePolicyId": CACHING_DISABLED_ID}
            ),
            "ViewerCertificate": Match.object_like(
              {"MinimumProtocolVersion": "TLSv1.2_2019"}
            ),
            "PriceClass": "PriceClass_100",
          }
        ),
      },
    )

  def test_unknown_cache_policy(self) -> None:
    """Verify an unknown cache policy name is rejected."""
    with pytest.raises(ValueError, match="Unknown cache policy"):
      synth_site(cache_policy="Managed-Nope")

  def test_health_evaluation_disabled(self) -> None:
    """Verify target health evaluation can be turned off."""
    template = synth_site(evaluate_target_health=False)
    template.has_resource_properties(
      "AWS::Route53::RecordSet",
      {"AliasTarget": Match.object_like({"EvaluateTargetHealth": False})},
    )

  def test_destroy_removal_policy(self) -> None:
    """Verify a destroyable bucket empties itself on deletion."""
    template = synth_site(removal_policy=RemovalPolicy.DESTROY)
    template.has_resource("AWS::S3::Bucket", {"DeletionPolicy": "Delete"})
    template.resource_count_is("Custom::S3AutoDeleteObjects", 1)

  def test_zone_lookup_without_id(self) -> None:
    """Verify the zone is looked up by name when no ID is configured."""
    template = synth_site(hosted_zone_id=None)
    template.resource_count_is("AWS::Route53::HostedZone", 0)
    template.has_resource_properties(
      "AWS::Route53::RecordSet",
      {"Name": "example.com.", "Type": "A"},
    )


class TestStaticSiteIdempotence:
  """Test that synthesis is deterministic."""

  def test_same_input_same_template(self) -> None:
    """Verify two syntheses of the same input produce identical templates."""
    assert synth_site().to_json() == synth_site().to_json()

  def test_resource_counts(self) -> None:
    """Verify expected number of key resources."""
    template = synth_site(domain_name="count-test.com")

    template.resource_count_is("AWS::S3::Bucket", 1)
    template.resource_count_is("AWS::CloudFront::Distribution", 1)
    template.resource_count_is("AWS::CloudFront::OriginAccessControl", 1)
    template.resource_count_is("AWS::CertificateManager::Certificate", 1)
    template.resource_count_is("AWS::Route53::RecordSet", 1)

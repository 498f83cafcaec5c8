"""CloudFront distribution for static website."""

from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from aws_cdk import aws_s3 as s3
from constructs import Construct

from static_site_infra.config import MANAGED_CACHE_POLICIES


def managed_cache_policy(name: str) -> cloudfront.ICachePolicy:
  """Resolve a managed cache policy by its CloudFront name."""
  try:
    attribute = MANAGED_CACHE_POLICIES[name]
  except KeyError:
    raise ValueError(f"Unknown cache policy: {name!r}") from None
  policy: cloudfront.ICachePolicy = getattr(cloudfront.CachePolicy, attribute)
  return policy


class SiteDistribution(Construct):
  """CloudFront distribution with an origin access control S3 origin."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
    certificate: acm.ICertificate,
    domain_name: str,
    cache_policy: str = "Managed-CachingOptimized",
    minimum_protocol_version: cloudfront.SecurityPolicyProtocol = (
      cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021
    ),
    price_class: cloudfront.PriceClass = cloudfront.PriceClass.PRICE_CLASS_ALL,
  ) -> None:
    super().__init__(scope, id)

    self.origin_access_control = cloudfront.S3OriginAccessControl(
      self,
      "OriginAccessControl",
      description=f"Origin access control for {domain_name}",
      signing=cloudfront.Signing.SIGV4_ALWAYS,
    )

    # Also adds the bucket policy statement allowing s3:GetObject for this
    # distribution only.
    origin = origins.S3BucketOrigin.with_origin_access_control(
      bucket,
      origin_access_control=self.origin_access_control,
      origin_access_levels=[cloudfront.AccessLevel.READ],
    )

    # No geo restriction: CloudFront serves every country by default.
    self.distribution = cloudfront.Distribution(
      self,
      "Distribution",
      comment=f"Static site for {domain_name}",
      default_behavior=cloudfront.BehaviorOptions(
        origin=origin,
        viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
        allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD,
        cached_methods=cloudfront.CachedMethods.CACHE_GET_HEAD,
        cache_policy=managed_cache_policy(cache_policy),
      ),
      domain_names=[domain_name],
      certificate=certificate,
      ssl_support_method=cloudfront.SSLMethod.SNI,
      minimum_protocol_version=minimum_protocol_version,
      default_root_object="index.html",
      price_class=price_class,
    )

"""CDK constructs for static website infrastructure."""

from .certificate import DnsValidatedCertificate
from .distribution import SiteDistribution
from .dns import AliasRecord
from .static_site import StaticSiteConstruct
from .storage import OriginBucket
from .zone import DomainZone

__all__ = [
  "AliasRecord",
  "DnsValidatedCertificate",
  "DomainZone",
  "OriginBucket",
  "SiteDistribution",
  "StaticSiteConstruct",
]

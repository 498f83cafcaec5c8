#!/usr/bin/env python3
"""Verify that a deployed static site reached its expected end state."""

import argparse
import json
import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3  # noqa: E402

from static_site_infra.verify import SiteStatus, check_site  # noqa: E402


def print_status(status: SiteStatus) -> None:
  """Print a human-readable summary of a site check."""
  print(f"Site: {status.domain}")
  print(f"  Hosted zone:   {status.hosted_zone_id or '-'}")
  print(f"  Certificate:   {status.certificate_arn or '-'}")
  print(
    f"  Distribution:  {status.distribution_id or '-'}"
    f" ({status.distribution_status or 'missing'})"
  )
  print(f"  Alias target:  {status.alias_target or '-'}")
  print()
  if status.ok:
    print("✓ All checks passed")
  else:
    for problem in status.problems:
      print(f"✗ {problem}")


def main() -> None:
  """Main entry point."""
  parser = argparse.ArgumentParser(
    description="Check the deployed state of a static site"
  )
  parser.add_argument(
    "domain",
    help="Root domain of the site (e.g., example.com)",
  )
  parser.add_argument(
    "--profile",
    default=None,
    help="AWS profile to use (default: current credentials)",
  )
  parser.add_argument(
    "--format",
    choices=["text", "json"],
    default="text",
    help="Output format (default: text)",
  )

  args = parser.parse_args()

  try:
    session = boto3.session.Session(profile_name=args.profile)
    status = check_site(args.domain, session=session)
  except Exception as e:
    print(f"Error: {e}", file=sys.stderr)
    sys.exit(1)

  if args.format == "json":
    print(json.dumps(status.to_dict(), indent=2))
  else:
    print_status(status)

  if not status.ok:
    sys.exit(1)


if __name__ == "__main__":
  main()

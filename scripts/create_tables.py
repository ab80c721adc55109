#!/usr/bin/env python3
"""Create the DynamoDB tables used by the Payment Method API.

Intended for local development (DynamoDB Local, LocalStack) and fresh
environments. Existing tables are left untouched.

Usage:
    python scripts/create_tables.py --env dev
    python scripts/create_tables.py --prefix tmf670-local --endpoint-url http://localhost:8000
"""

import argparse
import sys

import boto3

from tmf_shared.tables import create_tables


def main() -> int:
    """Run the table creation script."""
    parser = argparse.ArgumentParser(description="Create Payment Method API tables")
    parser.add_argument(
        "--env",
        choices=["dev", "staging", "prod"],
        default="dev",
        help="Target environment (default: dev)",
    )
    parser.add_argument(
        "--prefix",
        help="Table name prefix (default: tmf670-<env>)",
    )
    parser.add_argument("--region", help="AWS region (default: from environment)")
    parser.add_argument("--endpoint-url", help="DynamoDB endpoint, e.g. DynamoDB Local")
    args = parser.parse_args()

    prefix = args.prefix or f"tmf670-{args.env}"
    client = boto3.client(
        "dynamodb", region_name=args.region, endpoint_url=args.endpoint_url
    )

    created = create_tables(client, prefix)
    if created:
        for name in created:
            print(f"Created {name}")
    else:
        print(f"All tables with prefix {prefix} already exist")
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3

"""
This is a script to verify the login provider against its consumer contracts.
You can directly execute the script, or use a CLI command `verify-provider` that should be available after setting
up the project.

The script starts the login provider on a background thread, then replays the recorded interactions against it.
Provider states are switched through the provider's /setup endpoint before each interaction.

usage: verify-provider [-h] [--host HOST] [-p PORT] [-u [PACT_URL ...] | -b BROKER_URL] [-t [TAG ...]]
                       [--publish] [--provider-version PROVIDER_VERSION] [--provider-branch PROVIDER_BRANCH]
                       [--provider-tag [PROVIDER_TAG ...]]

options:
  -h, --help            show this help message and exit
  --host HOST           Host to serve the provider on
  -p PORT, --port PORT  Port to serve the provider on. An open port is picked when omitted
  -u [PACT_URL ...], --pact-url [PACT_URL ...]
                        Pact file(s), directory or URL(s) to verify against. Defaults to the local pact file
  -b BROKER_URL, --broker-url BROKER_URL
                        Pact broker URL to fetch pacts from. Defaults to PACT_BROKER_HOST
  -t [TAG ...], --tag [TAG ...]
                        Consumer version tag(s) to select pacts from the broker
  --publish             Publish verification results to the broker
  --provider-version PROVIDER_VERSION
                        Provider version to publish the verification results with
  --provider-branch PROVIDER_BRANCH
                        Provider branch to publish the verification results with
  --provider-tag [PROVIDER_TAG ...]
                        Provider version tag(s) to publish the verification results with
"""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError

from provider_verifier import CONSUMER_NAME, DEFAULT_PACT_DIR, PROVIDER_NAME
from provider_verifier.libraries.common.logging import get_logger
from provider_verifier.libraries.server import ProviderServer
from provider_verifier.libraries.verification import (
    BrokerSettings,
    ContractVerifier,
    ProviderVerificationError,
    VerifyRequest,
)

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="verify-provider")
    parser.add_argument("--host", dest="host", default="127.0.0.1", help="Host to serve the provider on")
    parser.add_argument(
        "-p", "--port", dest="port", type=int, help="Port to serve the provider on. An open port is picked when omitted"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-u",
        "--pact-url",
        dest="pact_urls",
        nargs="*",
        default=[],
        help="Pact file(s), directory or URL(s) to verify against. Defaults to the local pact file",
    )
    source.add_argument(
        "-b", "--broker-url", dest="broker_url", help="Pact broker URL to fetch pacts from. Defaults to PACT_BROKER_HOST"
    )
    parser.add_argument(
        "-t", "--tag", dest="tags", nargs="*", default=[], help="Consumer version tag(s) to select pacts from the broker"
    )
    parser.add_argument(
        "--publish", dest="publish", action="store_true", help="Publish verification results to the broker"
    )
    parser.add_argument(
        "--provider-version", dest="provider_version", help="Provider version to publish the verification results with"
    )
    parser.add_argument(
        "--provider-branch", dest="provider_branch", help="Provider branch to publish the verification results with"
    )
    parser.add_argument(
        "--provider-tag",
        dest="provider_tags",
        nargs="*",
        default=[],
        help="Provider version tag(s) to publish the verification results with",
    )
    return parser.parse_args(argv)


def build_verify_request(args: argparse.Namespace, base_url: str, setup_url: str) -> VerifyRequest:
    """Build a verification request from the command line args

    :param args: Parsed command line args
    :param base_url: Provider base URL
    :param setup_url: Provider state setup URL
    """
    broker = BrokerSettings.from_env()
    broker_url = args.broker_url or broker.url
    pact_urls = args.pact_urls
    if not pact_urls and not args.broker_url:
        pact_urls = [str(ContractVerifier(CONSUMER_NAME, PROVIDER_NAME, DEFAULT_PACT_DIR).pact_file)]
    return VerifyRequest(
        provider_base_url=base_url,
        pact_urls=pact_urls,
        provider_states_setup_url=setup_url,
        broker_url=broker_url,
        broker_username=broker.username,
        broker_password=broker.password,
        broker_token=broker.token,
        tags=args.tags,
        publish_verification_results=args.publish,
        provider_version=args.provider_version,
        provider_branch=args.provider_branch,
        provider_tags=args.provider_tags,
    )


def main(argv: list[str] | None = None) -> int:
    from login_provider import create_app

    args = parse_args(argv)
    verifier = ContractVerifier(CONSUMER_NAME, PROVIDER_NAME, DEFAULT_PACT_DIR)
    with ProviderServer(create_app(), host=args.host, port=args.port) as server:
        try:
            request = build_verify_request(args, server.base_url, server.setup_url)
        except ValidationError as e:
            logger.error(f"Invalid verification options:\n{e}")
            return 2
        try:
            verifier.verify_provider(request)
        except ProviderVerificationError:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

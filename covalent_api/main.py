"""
main.py

Command-line entry point. Calls one Covalent endpoint with parameters given as
``name=value`` pairs and prints the response body.

    covalent-api get_token_balances chain_id=1 address=demo.eth --quote-currency EUR
    covalent-api get_block chain_id=1 --dry-run
"""

import argparse
import json
import sys
from typing import Dict, List, Optional

from covalent_api.api.covalent_api import CovalentAPI
from covalent_api.api.credentials import mask_credential, resolve_credential
from covalent_api.api.endpoints import ENDPOINTS
from covalent_api.api.exceptions import CovalentAPIError, TransportError
from covalent_api.utils.config import get_config
from covalent_api.utils.logger import get_logger
from covalent_api.utils.sentry import close_sentry, init_sentry

logger = get_logger(__name__)

EXIT_TRANSPORT_ERROR = 1
EXIT_USAGE_ERROR = 2

# Keyword names taken by the client and builder signatures
RESERVED_PARAMS = ("api_key", "base_url", "config", "endpoint", "self")


def parse_params(pairs: List[str]) -> Dict[str, str]:
    """Splits ``name=value`` arguments; dashes in names become underscores."""
    params = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected name=value, got '{pair}'")
        name = name.strip().replace("-", "_")
        if name == "api_key":
            raise ValueError("Pass the access token with --api-key, not as a parameter")
        if name in RESERVED_PARAMS:
            raise ValueError(f"'{name}' is not an endpoint parameter")
        params[name] = value
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="covalent-api", description="Query the Covalent API.")
    parser.add_argument("endpoint", nargs="?", help="Endpoint name, see --list")
    parser.add_argument("params", nargs="*", metavar="name=value", help="Endpoint parameters")
    parser.add_argument("--api-key", help="Access token (default: COVALENT_API_KEY)")
    parser.add_argument("--quote-currency", help="Quote currency, e.g. USD")
    parser.add_argument("--format", dest="output_format", help="JSON or CSV")
    parser.add_argument("--dry-run", action="store_true", help="Print the request URL instead of sending it")
    parser.add_argument("--list", action="store_true", help="List the available endpoints")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Runs the command line.

    :return: Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for name in sorted(ENDPOINTS):
            print(f"{name}\t{ENDPOINTS[name].description}")
        return 0

    if not args.endpoint:
        parser.print_usage(sys.stderr)
        return EXIT_USAGE_ERROR
    if args.endpoint not in ENDPOINTS:
        print(f"Unknown endpoint '{args.endpoint}'. Use --list to see the available endpoints.",
              file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        params = parse_params(args.params)
    except ValueError as err:
        print(str(err), file=sys.stderr)
        return EXIT_USAGE_ERROR
    if args.quote_currency is not None:
        params["quote_currency"] = args.quote_currency
    if args.output_format is not None:
        params["output_format"] = args.output_format

    init_sentry()
    client = CovalentAPI(api_key=args.api_key, config=get_config())
    try:
        if args.dry_run:
            request = client.build_request(args.endpoint, **params)
            print(mask_credential(request.url, resolve_credential(client.api_key, client.config.API_KEY)))
            return 0

        body = client.request(args.endpoint, **params)
    except CovalentAPIError as err:
        print(str(err), file=sys.stderr)
        return EXIT_USAGE_ERROR
    except TransportError as err:
        key = resolve_credential(client.api_key, client.config.API_KEY)
        print(f"Request failed: {mask_credential(str(err), key)}", file=sys.stderr)
        return EXIT_TRANSPORT_ERROR
    finally:
        close_sentry()

    if isinstance(body, str):
        print(body)
    else:
        print(json.dumps(body, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

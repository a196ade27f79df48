import argparse
import json
import logging
import sys

import requests

from adyen_soap.client import SOAPError
from adyen_soap.config import ConfigError, load_configuration
from adyen_soap.integrations.pydantic import from_response
from adyen_soap.payment_service import PaymentService
from adyen_soap.payout_service import PayoutService
from adyen_soap.recurring_service import RecurringService
from adyen_soap.validator import Validator
from adyen_soap.writer import to_log_string

# operation name -> (service class, call method, request body method)
OPERATIONS = {
    "authorise_payment": (PaymentService, "authorise_payment", "authorise_payment_request_body"),
    "authorise_recurring_payment": (PaymentService, "authorise_recurring_payment", "authorise_recurring_payment_request_body"),
    "authorise_one_click_payment": (PaymentService, "authorise_one_click_payment", "authorise_one_click_payment_request_body"),
    "capture": (PaymentService, "capture", "capture_body"),
    "refund": (PaymentService, "refund", "refund_body"),
    "cancel_or_refund": (PaymentService, "cancel_or_refund", "cancel_or_refund_body"),
    "cancel": (PaymentService, "cancel", "cancel_body"),
    "list_recurring_details": (RecurringService, "list", "list_request_body"),
    "disable_recurring_contract": (RecurringService, "disable", "disable_request_body"),
    "store_token": (RecurringService, "store_token", "store_token_request_body"),
    "store_detail": (PayoutService, "store_detail", "store_detail_request_body"),
}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _env_override(value: str):
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _load_params(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        params = json.load(f)
    if not isinstance(params, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return params


def handle_call(args) -> None:
    """Handles the 'call' subcommand: performs one operation and prints the result as JSON."""
    try:
        params = _load_params(args.params)
        config = load_configuration(env_file=args.env_file, overrides=dict(args.set or ()))
        service_class, call_method, body_method = OPERATIONS[args.operation]
        service = service_class(params, config=config)

        if args.dry_run:
            print(to_log_string(getattr(service, body_method)()))
            return

        response = getattr(service, call_method)()
        print(from_response(response).model_dump_json(indent=2))
        if not response.success:
            sys.exit(1)

    except (OSError, ValueError, ConfigError, SOAPError, requests.RequestException) as e:
        print(f"Error calling {args.operation}: {e}", file=sys.stderr)
        sys.exit(1)


def handle_validate(args) -> None:
    """Handles the 'validate' subcommand: checks card and bank details in a params file."""
    try:
        params = _load_params(args.params)
    except (OSError, ValueError) as e:
        print(f"Error reading params: {e}", file=sys.stderr)
        sys.exit(1)

    reports = {}
    if params.get("card"):
        reports["card"] = Validator.validate_card(params["card"])
    if params.get("bank"):
        reports["bank"] = Validator.validate_bank(params["bank"])

    if not reports:
        print("Nothing to validate: params hold neither `card` nor `bank`.", file=sys.stderr)
        sys.exit(1)

    failed = False
    for name, report in reports.items():
        if report.is_valid:
            print(f"✅ {name}: valid")
            continue
        failed = True
        print(f"❌ {name}:")
        for err in report.errors:
            print(f"  - {err}")

    if failed:
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adyen-soap",
        description="Call Adyen's Payment, Recurring and Payout SOAP services."
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Subcommand: call
    call_parser = subparsers.add_parser("call", help="Perform an operation with params from a JSON file.")
    call_parser.add_argument("operation", choices=sorted(OPERATIONS), help="The operation to perform.")
    call_parser.add_argument("params", help="Path to a JSON file holding the params.")
    call_parser.add_argument("--env-file", default=".env", help="Path to a .env file with ADYEN_* settings (default: .env)")
    call_parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an ADYEN_* setting without editing the .env file",
    )
    call_parser.add_argument("--dry-run", action="store_true", help="Print the (masked) request instead of sending it.")
    call_parser.set_defaults(func=handle_call)

    # Subcommand: validate
    validate_parser = subparsers.add_parser("validate", help="Check card and bank details in a params file.")
    validate_parser.add_argument("params", help="Path to a JSON file holding the params.")
    validate_parser.set_defaults(func=handle_validate)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()

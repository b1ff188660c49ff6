from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from projclaim.adapters.manifests import to_manifest
from projclaim.app import (
    DEFAULT_MAX_PASSES,
    create_project_claim,
    get_project_claim,
    reconcile_until_settled,
    request_claim_deletion,
)
from projclaim.config import Backend, configure_logging, get_operator_config
from projclaim.domain.model import LegalEntity, NamespacedName

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _add_key_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--namespace", type=str, required=True, help="Claim namespace")
    parser.add_argument("--name", type=str, required=True, help="Claim name")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile GCP ProjectClaims")
    parser.add_argument(
        "--backend",
        choices=[backend.value for backend in Backend],
        default=None,
        help="Resource store to use (defaults to PROJCLAIM_BACKEND or sqlite)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Reconcile a ProjectClaim")
    _add_key_arguments(reconcile)
    reconcile.add_argument(
        "--max-passes",
        type=int,
        default=DEFAULT_MAX_PASSES,
        help="Maximum number of passes while the claim keeps requeueing (default: %(default)s)",
    )

    claim = subparsers.add_parser("claim", help="ProjectClaim management commands")
    claim_sub = claim.add_subparsers(dest="claim_command", required=True)

    claim_create = claim_sub.add_parser("create", help="Create a ProjectClaim")
    _add_key_arguments(claim_create)
    claim_create.add_argument(
        "--legal-entity-name",
        type=str,
        required=True,
        help="Name of the legal entity owning the project",
    )
    claim_create.add_argument(
        "--legal-entity-id",
        type=str,
        required=True,
        help="Identifier of the legal entity owning the project",
    )
    claim_create.add_argument("--region", type=str, default="", help="GCP region")

    claim_delete = claim_sub.add_parser("delete", help="Request deletion of a ProjectClaim")
    _add_key_arguments(claim_delete)

    claim_show = claim_sub.add_parser("show", help="Print a ProjectClaim manifest")
    _add_key_arguments(claim_show)

    return parser.parse_args(list(argv))


def _key(args: argparse.Namespace) -> NamespacedName:
    namespace = args.namespace.strip()
    name = args.name.strip()
    if not namespace or not name:
        raise ValueError("Both --namespace and --name must be non-blank")
    return NamespacedName(namespace=namespace, name=name)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        key = _key(parsed_args)
        if parsed_args.command == "reconcile" and parsed_args.max_passes < 1:
            raise ValueError("--max-passes must be at least 1")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        config = get_operator_config(backend=parsed_args.backend)
        if parsed_args.command == "reconcile":
            result = reconcile_until_settled(
                key, max_passes=parsed_args.max_passes, config=config
            )
            if result is None:
                log.info("ProjectClaim %s does not exist", key)
            elif result.requeue:
                log.warning("ProjectClaim %s has not settled yet (last step %s)", key, result.step)
        elif parsed_args.command == "claim" and parsed_args.claim_command == "create":
            create_project_claim(
                key,
                LegalEntity(name=parsed_args.legal_entity_name, id=parsed_args.legal_entity_id),
                region=parsed_args.region,
                config=config,
            )
        elif parsed_args.command == "claim" and parsed_args.claim_command == "delete":
            request_claim_deletion(key, config=config)
        elif parsed_args.command == "claim" and parsed_args.claim_command == "show":
            claim = get_project_claim(key, config=config)
            print(json.dumps(to_manifest(claim), indent=2))  # noqa: T201
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

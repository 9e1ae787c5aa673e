from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Sequence

from intune_policy_functions.auth import ServicePrincipal
from intune_policy_functions.config import Settings, SettingsManager, default_log_path
from intune_policy_functions.errors import PolicyWorkflowError, RequestValidationError
from intune_policy_functions.graph import GraphClient
from intune_policy_functions.services import (
    CompliancePolicyStrategy,
    PoliciesContext,
    WindowsUpdateForBusinessPolicyStrategy,
    WorkflowOutcome,
    create_or_reuse_and_assign,
)
from intune_policy_functions.utils import LoggingOptions, configure_logging, get_logger


STRATEGIES = {
    "compliance": CompliancePolicyStrategy,
    "update-ring": WindowsUpdateForBusinessPolicyStrategy,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intune-policy-functions",
        description=(
            "Create an Intune policy from the built-in template (unless an "
            "existing policy ID is given) and assign it to a group."
        ),
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging on stderr."
    )
    subparsers = parser.add_subparsers(dest="kind", required=True)
    for kind, help_text in (
        ("compliance", "Windows 10 compliance policy"),
        ("update-ring", "Windows Update for Business ring"),
    ):
        sub = subparsers.add_parser(kind, help=help_text)
        sub.add_argument("--group-id", required=True, help="Target group object ID.")
        sub.add_argument("--name", help="Display name for a newly created policy.")
        sub.add_argument("--description", default="", help="Policy description.")
        sub.add_argument(
            "--policy-id",
            help="Assign this existing policy instead of creating a new one.",
        )
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> WorkflowOutcome:
    if not args.policy_id and not args.name:
        raise RequestValidationError("--name is required when --policy-id is not given")

    credential = ServicePrincipal.from_settings(settings)
    access_token = await credential.get_access_token()
    async with GraphClient.from_settings(settings) as client:
        strategy = STRATEGIES[args.kind](client)
        context: PoliciesContext[Any] = PoliciesContext(
            args.name, args.description, strategy
        )
        return await create_or_reuse_and_assign(
            context,
            access_token=access_token,
            group_id=args.group_id,
            policy_id=args.policy_id,
        )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = SettingsManager().load()
    options = LoggingOptions.from_settings(settings, debug=args.debug)
    if options.log_path is None:
        options.log_path = default_log_path()
    configure_logging(options)
    logger = get_logger(__name__)

    try:
        outcome = asyncio.run(run(args, settings))
    except PolicyWorkflowError as exc:
        logger.error("Policy command failed", kind=args.kind, error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(
        json.dumps(
            {
                "policyId": outcome.policy_id,
                "created": outcome.created,
                "status": outcome.assignment.status,
                "body": outcome.assignment.body.to_graph(),
            },
            indent=2,
        )
    )
    return 0


__all__ = ["build_parser", "main", "run"]

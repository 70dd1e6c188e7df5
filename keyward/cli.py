#!/usr/bin/env python3
"""
rotate-access-key - rotate the IAM access keys of one principal

Every deletion and the creation of the new key is confirmed individually at
the terminal. The new secret is escrowed under {principal}-{key_id}-{date}.
"""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from botocore.exceptions import BotoCoreError

from .config.settings import Settings, get_settings, ESCROW_BACKENDS
from .exceptions import (
    ConfigurationError, DirectoryError, DirectoryUnavailable, KeywardError, RotationInterrupted
)
from .services.confirmation import InteractiveConfirmation
from .services.iam_directory import IAMCredentialDirectory
from .services.local_escrow import LocalEscrowStore
from .services.rotation_workflow import RotationWorkflow
from .services.secret_escrow import SecretEscrow, SecretEscrowWriter
from .services.secrets_manager_escrow import SecretsManagerEscrow
from .utils.encryption import EncryptionManager
from .utils.validation import validate_principal_name


logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rotate-access-key",
        description="Rotate the IAM access keys of a principal and escrow the new secret"
    )
    parser.add_argument("principal", help="IAM user name whose keys are rotated")
    parser.add_argument("--region", help="AWS region (default: AWS_REGION or us-east-1)")
    parser.add_argument("--profile", help="AWS named profile")
    parser.add_argument("--escrow", choices=ESCROW_BACKENDS,
                        help="Where the new secret is escrowed (default: secretsmanager)")
    parser.add_argument("--escrow-path", help="SQLite file for the local escrow store")
    parser.add_argument("--kms-key-id", help="KMS key for Secrets Manager escrow")
    parser.add_argument("--account-label",
                        help="Account label for the report (default: account alias or id)")
    parser.add_argument("--date", type=_parse_date,
                        help="Date used in the escrow name, YYYY-MM-DD (default: today)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show the rotation plan without prompting or changing anything")
    parser.add_argument("--log-level", help="Logging level (default: KEYWARD_LOG_LEVEL or INFO)")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """CLI flags take precedence over the environment"""
    if args.region:
        settings.region = args.region
    if args.profile:
        settings.profile = args.profile
    if args.escrow:
        settings.escrow_backend = args.escrow
    if args.escrow_path:
        settings.escrow_db_path = args.escrow_path
    if args.kms_key_id:
        settings.kms_key_id = args.kms_key_id
    if args.log_level:
        settings.log_level = args.log_level
    return settings


def build_escrow(settings: Settings, session) -> SecretEscrow:
    if settings.escrow_backend == 'local':
        return LocalEscrowStore(
            settings.escrow_db_path,
            EncryptionManager(settings.master_key)
        )
    return SecretsManagerEscrow.from_session(session, kms_key_id=settings.kms_key_id)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not validate_principal_name(args.principal):
        parser.error(f"invalid principal name: {args.principal!r}")

    settings = apply_overrides(get_settings(), args)
    try:
        settings.validate()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return e.exit_code

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        session = settings.get_boto3_session()
        directory = IAMCredentialDirectory.from_session(session)
        escrow = build_escrow(settings, session)
    except BotoCoreError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return ConfigurationError.exit_code
    except KeywardError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return e.exit_code

    account_label = args.account_label
    if not account_label:
        try:
            account_label = directory.get_account_label()
        except DirectoryError as e:
            print(f"Could not resolve account label: {e}", file=sys.stderr)
            return DirectoryUnavailable.exit_code
        except KeyboardInterrupt:
            print("\nInterrupted before any changes were made.", file=sys.stderr)
            return RotationInterrupted.exit_code

    workflow = RotationWorkflow(
        directory=directory,
        escrow_writer=SecretEscrowWriter(escrow),
        confirmation=InteractiveConfirmation()
    )

    # Interrupts during the run are reported by the workflow itself
    outcome = workflow.run(
        args.principal,
        account_label,
        args.date or date.today(),
        dry_run=args.dry_run
    )

    stream = sys.stderr if outcome.failure else sys.stdout
    print(outcome.report, file=stream)
    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())

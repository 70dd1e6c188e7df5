"""
Rotation workflow - drives one principal through resolve, plan, confirm,
execute, escrow and report
"""

import logging
from datetime import date
from typing import Optional, Tuple

from ..exceptions import CreationFailed, KeywardError, RotationInterrupted
from ..models.access_key import KeyInventory
from ..models.rotation_decision import ActionResult, CreateKey, RetireKey, RotationDecision
from ..models.rotation_outcome import RotationOutcome, WorkflowState
from .confirmation import ConfirmationGate
from .credential_directory import CredentialDirectory
from .key_inventory import KeyInventoryResolver
from .mutation_executor import MutationExecutor
from .notification import NotificationComposer
from .rotation_policy import RotationPolicyEngine
from .secret_escrow import SecretEscrowWriter


logger = logging.getLogger(__name__)


class RotationWorkflow:
    """
    State machine for a single rotation run

    States: Resolving -> Planning -> Confirming <-> Executing -> Escrowing
    -> Reporting -> Done. Any fatal KeywardError, or an operator interrupt,
    moves the run to Failed.
    Nothing is retried, and a key that was already minted is never deleted.
    """

    def __init__(self, directory: CredentialDirectory, escrow_writer: SecretEscrowWriter,
                 confirmation: ConfirmationGate, composer: NotificationComposer = None,
                 policy: RotationPolicyEngine = None):
        """
        Args:
            directory: Credential directory holding the principal's keys
            escrow_writer: Writer persisting the new secret
            confirmation: Approval boundary asked once per action
            composer: Report renderer
            policy: Rotation policy engine
        """
        self.resolver = KeyInventoryResolver(directory)
        self.executor = MutationExecutor(directory)
        self.escrow_writer = escrow_writer
        self.confirmation = confirmation
        self.composer = composer or NotificationComposer()
        self.policy = policy or RotationPolicyEngine()

    def run(self, principal: str, account_label: str, today: date,
            dry_run: bool = False) -> RotationOutcome:
        """
        Rotate the access keys of one principal

        Args:
            principal: Principal name
            account_label: Account alias or id for the report
            today: Date used in the escrow name
            dry_run: Resolve and plan only; no prompts and no mutations

        Returns:
            RotationOutcome in state Done or Failed
        """
        outcome = RotationOutcome(principal=principal, account_label=account_label, dry_run=dry_run)

        try:
            self._transition(outcome, WorkflowState.RESOLVING)
            inventory = self.resolver.resolve(principal)

            self._transition(outcome, WorkflowState.PLANNING)
            decision = self.policy.plan(inventory.active, inventory.inactive, principal)
            outcome.decision = decision

            if not dry_run:
                if decision.create is not None:
                    self.escrow_writer.check_name(principal, today)
                new_key = self._apply(outcome, inventory, decision)
                if new_key is not None:
                    key_id, secret = new_key
                    self._transition(outcome, WorkflowState.ESCROWING)
                    outcome.record = self.escrow_writer.store(principal, key_id, secret, today)

            self._transition(outcome, WorkflowState.REPORTING)
            outcome.report = self._render(outcome)
        except KeywardError as e:
            return self._fail(outcome, e)
        except KeyboardInterrupt:
            return self._fail(outcome, RotationInterrupted())

        self._transition(outcome, WorkflowState.DONE)
        logger.info(f"Rotation for {principal} finished")
        return outcome

    def _apply(self, outcome: RotationOutcome, inventory: KeyInventory,
               decision: RotationDecision) -> Optional[Tuple[str, str]]:
        """Confirm and execute each action in order. Returns the new key, if any."""
        principal = outcome.principal
        new_key = None

        for action in decision.actions:
            self._transition(outcome, WorkflowState.CONFIRMING)
            if not self.confirmation.confirm(action.describe(principal)):
                outcome.action_results.append(ActionResult(action=action, approved=False))
                continue

            self._transition(outcome, WorkflowState.EXECUTING)
            if isinstance(action, RetireKey):
                outcome.action_results.append(self.executor.retire(principal, action.key_id))
            elif isinstance(action, CreateKey):
                remaining = inventory.total - len(outcome.retired_key_ids)
                if remaining >= self.policy.max_keys:
                    logger.warning(
                        f"{principal} still holds {remaining} access keys; "
                        f"the directory may refuse to create another"
                    )
                try:
                    new_key = self.executor.create(principal)
                except CreationFailed as e:
                    outcome.action_results.append(
                        ActionResult(action=action, approved=True, error=str(e))
                    )
                    raise
                outcome.new_key_id = new_key[0]
                outcome.action_results.append(ActionResult(action=action, approved=True, succeeded=True))

        return new_key

    def _render(self, outcome: RotationOutcome) -> str:
        if outcome.record is not None:
            return self.composer.render(
                outcome.principal, outcome.account_label, outcome.record, outcome.action_results
            )
        return self.composer.render_without_key(
            outcome.principal, outcome.account_label, outcome.decision,
            outcome.action_results, dry_run=outcome.dry_run
        )

    def _fail(self, outcome: RotationOutcome, error: KeywardError) -> RotationOutcome:
        outcome.failure = error
        outcome.failed_in = outcome.state
        outcome.state = WorkflowState.FAILED
        if outcome.new_key_id:
            logger.error(
                f"Rotation for {outcome.principal} failed in {outcome.failed_in.value} "
                f"after creating access key {outcome.new_key_id}: {error}"
            )
        else:
            logger.error(f"Rotation for {outcome.principal} failed in {outcome.failed_in.value}: {error}")
        outcome.report = self.composer.render_failure(
            outcome.principal, outcome.account_label, error,
            outcome.new_key_id, outcome.action_results
        )
        return outcome

    @staticmethod
    def _transition(outcome: RotationOutcome, state: WorkflowState) -> None:
        if outcome.state != state:
            logger.debug(f"{outcome.principal}: {outcome.state.value} -> {state.value}")
        outcome.state = state

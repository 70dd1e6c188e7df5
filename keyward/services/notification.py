"""
Notification composer - human-readable summaries of a rotation run
All renderers are pure: they format their arguments and nothing else.
Secret material is never rendered.
"""

from typing import List, Optional

from ..exceptions import EscrowError, KeywardError, RotationInterrupted
from ..models.escrow_record import EscrowRecord
from ..models.rotation_decision import ActionResult, CreateKey, RetireKey, RotationDecision


RULE = "-" * 60


class NotificationComposer:
    """Renders the operator-facing report for each way a run can end"""

    def render(self, principal: str, account_label: str, record: EscrowRecord,
               action_results: Optional[List[ActionResult]] = None) -> str:
        """
        Report for a run that minted and escrowed a new key

        Args:
            principal: Principal name
            account_label: Account alias or id
            record: Escrow record of the new key
            action_results: Optional per-action log to summarise retirements

        Returns:
            Report text
        """
        lines = [
            f"Access key rotated for {principal} in account {account_label}",
            RULE,
            f"New access key id : {record.key_id}",
            f"Escrow secret     : {record.name}",
            f"Date              : {record.created_on.isoformat()}",
        ]
        lines.extend(self._retirement_lines(action_results or []))
        lines.append(RULE)
        lines.append(
            f"Retrieve the credentials from the secret store entry '{record.name}' "
            f"and hand them to the owner of {principal}."
        )
        return "\n".join(lines)

    def render_without_key(self, principal: str, account_label: str,
                           decision: RotationDecision,
                           action_results: Optional[List[ActionResult]] = None,
                           dry_run: bool = False) -> str:
        """
        Report for a run that ended without a new key

        Covers manual review, a declined creation and dry runs, so the
        report never depends on values from a creation that did not happen.
        """
        action_results = action_results or []
        if dry_run:
            heading = f"Dry run for {principal} in account {account_label}: no changes made"
        else:
            heading = f"No new access key for {principal} in account {account_label}"

        lines = [heading, RULE]

        if dry_run:
            if decision.is_empty:
                lines.append("Planned actions   : none")
            else:
                lines.append("Planned actions   :")
                lines.extend(f"  - {action.describe(principal)}" for action in decision.actions)

        if decision.manual_review_required:
            lines.append(
                f"Manual review required: {principal} already has two active access keys. "
                f"Decide which one to revoke before rotating again."
            )
        elif any(isinstance(r.action, CreateKey) and r.declined for r in action_results):
            lines.append("Creation of a new access key was declined by the operator.")

        lines.extend(self._retirement_lines(action_results))
        lines.append(RULE)
        lines.append("No secret was escrowed.")
        return "\n".join(lines)

    def render_failure(self, principal: str, account_label: str, failure: KeywardError,
                       new_key_id: Optional[str] = None,
                       action_results: Optional[List[ActionResult]] = None) -> str:
        """
        Report for a run that ended in a fatal error

        When a key was already minted its id is printed so the operator can
        secure the secret by hand.
        """
        lines = [
            f"Access key rotation FAILED for {principal} in account {account_label}",
            RULE,
            f"Error             : {failure.__class__.__name__}: {failure}",
        ]
        lines.extend(self._retirement_lines(action_results or []))
        if new_key_id:
            lines.append(f"New access key id : {new_key_id}")
            if isinstance(failure, EscrowError):
                lines.append(f"Escrow secret     : {failure.name}")
            if isinstance(failure, RotationInterrupted):
                escrowed = "may not have been escrowed"
            else:
                escrowed = "was NOT escrowed"
            lines.append(
                f"WARNING: access key {new_key_id} was created but its secret {escrowed}. "
                f"The key has not been deleted; secure or delete it manually."
            )
        return "\n".join(lines)

    def _retirement_lines(self, action_results: List[ActionResult]) -> List[str]:
        lines = []
        for result in action_results:
            if not isinstance(result.action, RetireKey):
                continue
            key_id = result.action.key_id
            if result.declined:
                lines.append(f"Kept key          : {key_id} (deletion declined)")
            elif result.succeeded:
                lines.append(f"Deleted key       : {key_id}")
            else:
                lines.append(f"Delete failed     : {key_id} ({result.error})")
        return lines

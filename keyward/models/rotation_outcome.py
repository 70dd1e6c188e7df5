"""
RotationOutcome data model - the result of one workflow run
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional

from .rotation_decision import RotationDecision, ActionResult, RetireKey, CreateKey
from .escrow_record import EscrowRecord
from ..exceptions import KeywardError


class WorkflowState(str, Enum):
    """States of a rotation run"""
    RESOLVING = "Resolving"
    PLANNING = "Planning"
    CONFIRMING = "Confirming"
    EXECUTING = "Executing"
    ESCROWING = "Escrowing"
    REPORTING = "Reporting"
    DONE = "Done"
    FAILED = "Failed"


@dataclass
class RotationOutcome:
    """
    Final state of a rotation run for one principal

    Attributes:
        principal: Principal name
        account_label: Account label used in the report
        state: Final workflow state (Done or Failed)
        decision: The plan, if planning was reached
        action_results: One entry per proposed action that was reached
        record: Escrow record for the new key, if one was escrowed
        new_key_id: Id of the minted key, set even when escrow fails
        failure: The fatal error that ended the run, if any
        failed_in: State in which the fatal error occurred
        report: Rendered human-readable summary
        dry_run: Whether mutations were skipped
    """
    principal: str
    account_label: str
    state: WorkflowState = WorkflowState.RESOLVING
    decision: Optional[RotationDecision] = None
    action_results: List[ActionResult] = field(default_factory=list)
    record: Optional[EscrowRecord] = None
    new_key_id: Optional[str] = None
    failure: Optional[KeywardError] = None
    failed_in: Optional[WorkflowState] = None
    report: str = ""
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        return self.state == WorkflowState.DONE

    @property
    def exit_code(self) -> int:
        if self.failure is not None:
            return self.failure.exit_code
        return 0

    @property
    def retired_key_ids(self) -> List[str]:
        return [
            result.action.key_id for result in self.action_results
            if isinstance(result.action, RetireKey) and result.succeeded
        ]

    @property
    def declined_actions(self) -> List[ActionResult]:
        return [result for result in self.action_results if result.declined]

    @property
    def failed_deletions(self) -> List[ActionResult]:
        return [
            result for result in self.action_results
            if isinstance(result.action, RetireKey) and result.approved and not result.succeeded
        ]

    @property
    def creation_declined(self) -> bool:
        return any(
            isinstance(result.action, CreateKey) and result.declined
            for result in self.action_results
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (no secret material)"""
        return {
            'principal': self.principal,
            'account_label': self.account_label,
            'state': self.state.value,
            'decision': self.decision.to_dict() if self.decision else None,
            'action_results': [result.to_dict() for result in self.action_results],
            'record': self.record.to_dict() if self.record else None,
            'new_key_id': self.new_key_id,
            'failure': str(self.failure) if self.failure else None,
            'failed_in': self.failed_in.value if self.failed_in else None,
            'dry_run': self.dry_run,
            'exit_code': self.exit_code,
        }

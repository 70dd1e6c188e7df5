"""
RotationDecision data model - the plan produced for one principal
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Union


@dataclass(frozen=True)
class RetireKey:
    """Proposal to delete one (inactive) access key"""
    key_id: str

    def describe(self, principal: str) -> str:
        return f"Delete inactive access key {self.key_id} for {principal}?"

    def to_dict(self) -> Dict[str, Any]:
        return {'action': 'RetireKey', 'key_id': self.key_id}


@dataclass(frozen=True)
class CreateKey:
    """Proposal to mint a replacement access key"""

    def describe(self, principal: str) -> str:
        return f"Create a new access key for {principal}?"

    def to_dict(self) -> Dict[str, Any]:
        return {'action': 'CreateKey'}


ProposedAction = Union[RetireKey, CreateKey]


@dataclass
class RotationDecision:
    """
    Ordered retirements followed by an optional creation

    Attributes:
        principal: Principal the plan applies to
        retirements: RetireKey actions, one per distinct inactive key
        create: CreateKey if fewer than 2 active keys remain, else None
        manual_review_required: Set when the principal already holds two
            active keys, so no key can be assumed stale
    """
    principal: str
    retirements: List[RetireKey] = field(default_factory=list)
    create: Optional[CreateKey] = None
    manual_review_required: bool = False

    @property
    def actions(self) -> List[ProposedAction]:
        """Actions in execution order: retirements first, then creation"""
        actions: List[ProposedAction] = list(self.retirements)
        if self.create is not None:
            actions.append(self.create)
        return actions

    @property
    def is_empty(self) -> bool:
        return not self.retirements and self.create is None

    def validate(self) -> bool:
        """Validate the RotationDecision instance"""
        if not isinstance(self.principal, str):
            return False
        key_ids = [retire.key_id for retire in self.retirements]
        if len(key_ids) != len(set(key_ids)):
            return False
        # Creation and manual review are mutually exclusive
        if self.create is not None and self.manual_review_required:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'principal': self.principal,
            'actions': [action.to_dict() for action in self.actions],
            'manual_review_required': self.manual_review_required,
        }


@dataclass
class ActionResult:
    """
    What happened to one proposed action

    Attributes:
        action: The proposed action
        approved: Whether the operator approved it
        succeeded: Whether the directory call succeeded (False when declined)
        error: Failure message when the call was rejected
    """
    action: ProposedAction
    approved: bool
    succeeded: bool = False
    error: Optional[str] = None

    @property
    def declined(self) -> bool:
        return not self.approved

    def to_dict(self) -> Dict[str, Any]:
        data = self.action.to_dict()
        data.update({
            'approved': self.approved,
            'succeeded': self.succeeded,
            'error': self.error,
        })
        return data

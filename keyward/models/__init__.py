"""
Core data models for keyward
"""

from .access_key import AccessKey, KeyStatus, KeyInventory, Principal, MAX_KEYS_PER_PRINCIPAL
from .rotation_decision import RotationDecision, RetireKey, CreateKey, ActionResult
from .escrow_record import EscrowRecord
from .rotation_outcome import RotationOutcome, WorkflowState

__all__ = [
    "AccessKey",
    "KeyStatus",
    "KeyInventory",
    "Principal",
    "MAX_KEYS_PER_PRINCIPAL",
    "RotationDecision",
    "RetireKey",
    "CreateKey",
    "ActionResult",
    "EscrowRecord",
    "RotationOutcome",
    "WorkflowState"
]

"""
Rotation Policy Engine - decides which keys to retire and whether a new key may be minted
"""

import logging
from typing import Iterable, List

from ..models.access_key import AccessKey, MAX_KEYS_PER_PRINCIPAL
from ..models.rotation_decision import RotationDecision, RetireKey, CreateKey


logger = logging.getLogger(__name__)


def _distinct_ids(keys: Iterable[AccessKey]) -> List[str]:
    """Key ids with duplicates removed, first-seen order kept"""
    return list(dict.fromkeys(key.key_id for key in keys))


class RotationPolicyEngine:
    """
    Plans a rotation from a classified key inventory

    Inactive keys are always retired: they carry no live traffic and only
    accumulate audit debt. A new key is proposed only while the principal
    holds fewer active keys than the provider ceiling. At the ceiling no
    active key can be assumed stale, so the plan asks for manual review
    instead.

    The engine only produces plans. It never talks to the directory.
    """

    def __init__(self, max_keys: int = MAX_KEYS_PER_PRINCIPAL):
        if max_keys < 1:
            raise ValueError("max_keys must be at least 1")
        self.max_keys = max_keys

    def plan(self, active: List[AccessKey], inactive: List[AccessKey],
             principal: str = "") -> RotationDecision:
        """
        Build the rotation plan

        Args:
            active: Active keys of the principal
            inactive: Inactive keys of the principal
            principal: Principal name recorded on the decision

        Returns:
            RotationDecision with one RetireKey per distinct inactive key,
            followed by CreateKey when fewer than max_keys active keys remain
        """
        active_ids = _distinct_ids(active)
        retire_ids = [
            key_id for key_id in _distinct_ids(inactive)
            if key_id not in active_ids
        ]

        decision = RotationDecision(
            principal=principal,
            retirements=[RetireKey(key_id) for key_id in retire_ids]
        )

        # Inactive keys never count toward the active ceiling
        remaining_active = len(active_ids)
        if remaining_active < self.max_keys:
            decision.create = CreateKey()
        else:
            decision.manual_review_required = True
            logger.warning(
                f"{principal or 'Principal'} already has {remaining_active} active access keys; "
                f"manual review is required to choose which one to revoke"
            )

        logger.info(
            f"Planned rotation for {principal or 'principal'}: "
            f"{len(decision.retirements)} retirement(s), "
            f"{'create new key' if decision.create else 'no new key'}"
        )
        return decision

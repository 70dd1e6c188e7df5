"""
Access key and principal data models
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List


# Provider-enforced ceiling on keys per principal
MAX_KEYS_PER_PRINCIPAL = 2


class KeyStatus(str, Enum):
    """Access key status as reported by the directory"""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


@dataclass
class Principal:
    """
    The account/user whose keys are being rotated

    Attributes:
        name: Unique principal name
        exists: Whether the directory knows this principal
    """
    name: str
    exists: bool = True

    def validate(self) -> bool:
        """Validate the Principal instance"""
        if not self.name or not isinstance(self.name, str):
            return False
        if not isinstance(self.exists, bool):
            return False
        return True


@dataclass
class AccessKey:
    """
    Read-only snapshot of one access key owned by the directory

    Attributes:
        key_id: Opaque identifier, unique per principal
        status: Active or Inactive
        created_at: Timestamp when the key was created
    """
    key_id: str
    status: KeyStatus
    created_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == KeyStatus.ACTIVE

    def validate(self) -> bool:
        """Validate the AccessKey instance"""
        if not self.key_id or not isinstance(self.key_id, str):
            return False
        if not isinstance(self.status, KeyStatus):
            return False
        if not isinstance(self.created_at, datetime):
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the directory-neutral dictionary shape"""
        return {
            'id': self.key_id,
            'status': self.status.value,
            'created_at': self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AccessKey':
        """
        Create an AccessKey from a listing entry

        Accepts both {id, status, created_at} and the IAM
        AccessKeyMetadata shape {AccessKeyId, Status, CreateDate}.
        """
        key_id = data.get('id') or data.get('AccessKeyId')
        status = data.get('status') or data.get('Status')
        created_at = data.get('created_at') or data.get('CreateDate')
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(key_id=key_id, status=KeyStatus(status), created_at=created_at)


@dataclass
class KeyInventory:
    """
    A principal's keys partitioned by status

    Ordering within each partition carries no meaning.
    """
    principal: str
    active: List[AccessKey] = field(default_factory=list)
    inactive: List[AccessKey] = field(default_factory=list)

    @property
    def all_keys(self) -> List[AccessKey]:
        return self.active + self.inactive

    @property
    def total(self) -> int:
        return len(self.active) + len(self.inactive)

    def key_ids(self) -> List[str]:
        return [key.key_id for key in self.all_keys]

    @classmethod
    def from_keys(cls, principal: str, keys: List[AccessKey]) -> 'KeyInventory':
        """Partition a flat key listing by status"""
        inventory = cls(principal=principal)
        for key in keys:
            if key.is_active:
                inventory.active.append(key)
            else:
                inventory.inactive.append(key)
        return inventory

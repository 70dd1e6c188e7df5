"""
EscrowRecord data model for secrets persisted after rotation
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Any
import json


@dataclass
class EscrowRecord:
    """
    A newly minted credential as written to the secret escrow

    Attributes:
        name: Escrow name, {principal}-{key_id}-{date}
        key_id: Access key id of the new key
        secret: Secret access key (never shown in repr)
        principal: Principal the key belongs to
        created_on: Date used in the escrow name
    """
    name: str
    key_id: str
    secret: str = field(repr=False)
    principal: str
    created_on: date

    @staticmethod
    def build_name(principal: str, key_id: str, day: date) -> str:
        """Derive the escrow name. Same inputs always give the same name."""
        return f"{principal}-{key_id}-{day.isoformat()}"

    @classmethod
    def create_new(cls, principal: str, key_id: str, secret: str, day: date) -> 'EscrowRecord':
        """Create an EscrowRecord with its derived name"""
        return cls(
            name=cls.build_name(principal, key_id, day),
            key_id=key_id,
            secret=secret,
            principal=principal,
            created_on=day
        )

    def validate(self) -> bool:
        """Validate the EscrowRecord instance"""
        if not self.key_id or not isinstance(self.key_id, str):
            return False
        if not self.secret or not isinstance(self.secret, str):
            return False
        if not self.principal or not isinstance(self.principal, str):
            return False
        if not isinstance(self.created_on, date):
            return False
        return self.name == self.build_name(self.principal, self.key_id, self.created_on)

    def to_payload(self) -> str:
        """JSON document stored in the escrow"""
        return json.dumps({
            'AccessKeyId': self.key_id,
            'SecretAccessKey': self.secret
        })

    def to_dict(self) -> Dict[str, Any]:
        """Metadata only - the secret is never included"""
        return {
            'name': self.name,
            'key_id': self.key_id,
            'principal': self.principal,
            'created_on': self.created_on.isoformat()
        }

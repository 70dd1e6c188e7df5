"""
Secret escrow interface and writer for newly minted credentials
"""

import logging
from abc import ABC, abstractmethod
from datetime import date

from ..exceptions import EscrowError, EscrowUnavailable
from ..models.escrow_record import EscrowRecord


logger = logging.getLogger(__name__)

# Stand-in for a key id that does not exist yet; IAM ids are uppercase alphanumerics
SAMPLE_KEY_ID = "AKIA" + "0" * 16


class SecretEscrow(ABC):
    """
    Write-once key-value store for secrets

    put_secret must raise EscrowNameCollision when the name is taken and
    EscrowUnavailable when the store cannot be written. Existing secrets
    are never overwritten.
    """

    @abstractmethod
    def put_secret(self, name: str, payload: str) -> None:
        """Persist payload under name"""

    def accepts_name(self, name: str) -> bool:
        """Whether this store can hold a secret called name"""
        return isinstance(name, str) and bool(name)


class SecretEscrowWriter:
    """Derives the escrow name for a new key and persists its secret"""

    def __init__(self, escrow: SecretEscrow):
        self.escrow = escrow

    def check_name(self, principal: str, day: date) -> None:
        """
        Check, before any key is minted, that the escrow can hold the name
        a new key for principal would get on day

        Raises:
            EscrowUnavailable: If the escrow rejects the derived name
        """
        name = EscrowRecord.build_name(principal, SAMPLE_KEY_ID, day)
        if not self.escrow.accepts_name(name):
            raise EscrowUnavailable(
                EscrowRecord.build_name(principal, "<new key id>", day),
                "derived name is not a valid secret name"
            )

    def store(self, principal: str, key_id: str, secret: str, day: date) -> EscrowRecord:
        """
        Escrow a newly created key

        Args:
            principal: Principal the key belongs to
            key_id: New access key id
            secret: New secret access key
            day: Date used in the escrow name

        Returns:
            The EscrowRecord that was written

        Raises:
            EscrowNameCollision: If a secret with the derived name exists
            EscrowUnavailable: If the escrow could not be written
        """
        record = EscrowRecord.create_new(principal, key_id, secret, day)
        if not self.escrow.accepts_name(record.name):
            raise EscrowUnavailable(record.name, "derived name is not a valid secret name", key_id)

        try:
            self.escrow.put_secret(record.name, record.to_payload())
        except EscrowError as e:
            e.key_id = key_id
            logger.error(f"Failed to escrow access key {key_id} as {record.name}: {e}")
            raise

        logger.info(f"Escrowed access key {key_id} for {principal} as {record.name}")
        return record

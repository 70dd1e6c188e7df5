"""
Local escrow backend - encrypted SQLite store for escrowed secrets
"""

import sqlite3
import logging
from datetime import datetime, timezone
from typing import List, Optional
from contextlib import contextmanager

from ..exceptions import EscrowNameCollision, EscrowUnavailable
from ..utils.encryption import EncryptionManager
from .secret_escrow import SecretEscrow


logger = logging.getLogger(__name__)


class LocalEscrowStore(SecretEscrow):
    """
    Write-once SQLite escrow with Fernet-encrypted payloads

    The secret name is the primary key, so a second write under the same
    name fails instead of replacing the first.
    """

    def __init__(self, db_path: str = "keyward_escrow.db",
                 encryption_manager: EncryptionManager = None):
        """
        Initialize local escrow store

        Args:
            db_path: Path to SQLite database file
            encryption_manager: Encryption manager protecting payloads at rest
        """
        self.db_path = db_path
        self.encryption_manager = encryption_manager or EncryptionManager()
        self._init_database()

    def _init_database(self) -> None:
        """Initialize SQLite database with required tables"""
        try:
            with self._get_connection() as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS escrowed_secrets (
                        name TEXT PRIMARY KEY,
                        encrypted_payload BLOB NOT NULL,
                        created_at TEXT NOT NULL
                    )
                """)
                conn.commit()
        except sqlite3.Error as e:
            raise EscrowUnavailable(self.db_path, f"cannot initialise escrow database: {e}")

    @contextmanager
    def _get_connection(self):
        """Context manager for database connections"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def put_secret(self, name: str, payload: str) -> None:
        encrypted_payload = self.encryption_manager.encrypt(payload)
        try:
            with self._get_connection() as conn:
                conn.execute("""
                    INSERT INTO escrowed_secrets (name, encrypted_payload, created_at)
                    VALUES (?, ?, ?)
                """, (name, encrypted_payload, datetime.now(timezone.utc).isoformat()))
                conn.commit()
        except sqlite3.IntegrityError:
            raise EscrowNameCollision(name)
        except sqlite3.Error as e:
            raise EscrowUnavailable(name, str(e))

        logger.debug(f"Stored escrow secret {name} in {self.db_path}")

    def get_secret(self, name: str) -> Optional[str]:
        """
        Retrieve and decrypt an escrowed payload

        Args:
            name: Escrow secret name

        Returns:
            Decrypted JSON payload if found, None otherwise
        """
        with self._get_connection() as conn:
            cursor = conn.execute("""
                SELECT encrypted_payload FROM escrowed_secrets WHERE name = ?
            """, (name,))
            row = cursor.fetchone()

        if row is None:
            return None
        return self.encryption_manager.decrypt(row['encrypted_payload'])

    def list_names(self) -> List[str]:
        """Names of all escrowed secrets, oldest first"""
        with self._get_connection() as conn:
            cursor = conn.execute("""
                SELECT name FROM escrowed_secrets ORDER BY created_at, name
            """)
            return [row['name'] for row in cursor.fetchall()]

"""
Shared fixtures: in-memory credential directory and escrow
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

import pytest

from keyward.exceptions import DirectoryError, EscrowNameCollision, EscrowUnavailable
from keyward.models.access_key import AccessKey, KeyStatus
from keyward.services.credential_directory import CredentialDirectory
from keyward.services.secret_escrow import SecretEscrow
from keyward.utils.validation import validate_secret_name


BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_key(key_id: str, status: KeyStatus = KeyStatus.ACTIVE, age_days: int = 0) -> AccessKey:
    return AccessKey(key_id=key_id, status=status, created_at=BASE_TIME - timedelta(days=age_days))


class FakeDirectory(CredentialDirectory):
    """In-memory directory that records every call"""

    def __init__(self, principals: Optional[Dict[str, List[AccessKey]]] = None,
                 account_label: str = "acme-prod"):
        self.keys = {name: list(keys) for name, keys in (principals or {}).items()}
        self.account_label = account_label
        self.calls: List[Tuple] = []
        self.fail_delete: Dict[str, str] = {}
        self.fail_create: Optional[str] = None
        self.fail_listing: Optional[str] = None
        self._counter = 0

    @property
    def mutation_calls(self) -> List[Tuple]:
        return [call for call in self.calls if call[0] in ('delete_key', 'create_key')]

    def get_principal(self, name: str) -> bool:
        self.calls.append(('get_principal', name))
        return name in self.keys

    def list_keys(self, name: str) -> List[AccessKey]:
        self.calls.append(('list_keys', name))
        if self.fail_listing:
            raise DirectoryError(self.fail_listing)
        return list(self.keys[name])

    def delete_key(self, name: str, key_id: str) -> None:
        self.calls.append(('delete_key', name, key_id))
        if key_id in self.fail_delete:
            raise DirectoryError(self.fail_delete[key_id])
        remaining = [key for key in self.keys[name] if key.key_id != key_id]
        if len(remaining) == len(self.keys[name]):
            raise DirectoryError(f"NoSuchEntity: access key {key_id} not found")
        self.keys[name] = remaining

    def create_key(self, name: str) -> Tuple[str, str]:
        self.calls.append(('create_key', name))
        if self.fail_create:
            raise DirectoryError(self.fail_create)
        if len(self.keys[name]) >= 2:
            raise DirectoryError("LimitExceeded: Cannot exceed quota for AccessKeysPerUser: 2")
        self._counter += 1
        key_id = f"AKIANEWKEY{self._counter:010d}"
        self.keys[name].append(AccessKey(key_id, KeyStatus.ACTIVE, BASE_TIME))
        return key_id, f"secret-{self._counter}"

    def get_account_label(self) -> str:
        return self.account_label


class FakeEscrow(SecretEscrow):
    """In-memory write-once escrow following Secrets Manager naming rules"""

    def __init__(self, unavailable: Optional[str] = None):
        self.secrets: Dict[str, str] = {}
        self.unavailable = unavailable

    def accepts_name(self, name: str) -> bool:
        return validate_secret_name(name)

    def put_secret(self, name: str, payload: str) -> None:
        if self.unavailable:
            raise EscrowUnavailable(name, self.unavailable)
        if name in self.secrets:
            raise EscrowNameCollision(name)
        self.secrets[name] = payload


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def escrow():
    return FakeEscrow()


@pytest.fixture
def temp_db_path():
    """Temporary SQLite path that does not exist yet"""
    fd, path = tempfile.mkstemp(suffix='.db')
    os.close(fd)
    os.unlink(path)
    yield path
    if os.path.exists(path):
        os.unlink(path)

"""
Unit tests for MutationExecutor
"""

import pytest

from keyward.exceptions import CreationFailed
from keyward.models import KeyStatus, RetireKey
from keyward.services.mutation_executor import MutationExecutor

from conftest import FakeDirectory, make_key


class TestMutationExecutor:
    """Test cases for MutationExecutor"""

    @pytest.fixture
    def directory(self):
        return FakeDirectory({'alice': [make_key('A1'), make_key('I1', KeyStatus.INACTIVE)]})

    @pytest.fixture
    def executor(self, directory):
        return MutationExecutor(directory)

    def test_retire_success(self, executor, directory):
        """Test a successful deletion"""
        result = executor.retire('alice', 'I1')

        assert result.action == RetireKey('I1')
        assert result.approved is True
        assert result.succeeded is True
        assert result.error is None
        assert 'I1' not in [k.key_id for k in directory.keys['alice']]

    def test_retire_failure_is_captured(self, executor, directory):
        """Test that a rejected deletion is reported, not raised"""
        directory.fail_delete['I1'] = "AccessDenied: not authorized"

        result = executor.retire('alice', 'I1')

        assert result.succeeded is False
        assert "I1" in result.error
        assert "AccessDenied" in result.error

    def test_retire_already_gone(self, executor):
        """Test deleting a key that no longer exists"""
        result = executor.retire('alice', 'GONE')

        assert result.succeeded is False
        assert "NoSuchEntity" in result.error

    def test_create_success(self, executor, directory):
        """Test minting a new key"""
        directory.keys['alice'] = [make_key('A1')]

        key_id, secret = executor.create('alice')

        assert key_id.startswith('AKIANEWKEY')
        assert secret == 'secret-1'

    def test_create_failure_raises(self, executor, directory):
        """Test that a rejected creation is fatal"""
        directory.fail_create = "ServiceFailure: try again"

        with pytest.raises(CreationFailed, match="ServiceFailure"):
            executor.create('alice')

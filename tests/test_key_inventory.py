"""
Unit tests for KeyInventoryResolver
"""

import pytest

from keyward.exceptions import DirectoryUnavailable, PrincipalNotFound
from keyward.models import KeyStatus, Principal
from keyward.services.key_inventory import KeyInventoryResolver

from conftest import FakeDirectory, make_key


class TestKeyInventoryResolver:
    """Test cases for KeyInventoryResolver"""

    def test_resolve_partitions_keys(self):
        """Test that keys are split by status"""
        directory = FakeDirectory({'alice': [
            make_key('A1'),
            make_key('I1', KeyStatus.INACTIVE),
        ]})

        inventory = KeyInventoryResolver(directory).resolve('alice')

        assert inventory.principal == 'alice'
        assert [k.key_id for k in inventory.active] == ['A1']
        assert [k.key_id for k in inventory.inactive] == ['I1']

    def test_resolve_principal_not_found(self):
        """Test that a missing principal is reported and keys are never listed"""
        directory = FakeDirectory({'alice': []})

        with pytest.raises(PrincipalNotFound, match="bob"):
            KeyInventoryResolver(directory).resolve('bob')

        assert ('list_keys', 'bob') not in directory.calls

    def test_resolve_existing_principal_without_keys(self):
        """Test that zero keys is not the same as a missing principal"""
        directory = FakeDirectory({'alice': []})

        inventory = KeyInventoryResolver(directory).resolve('alice')

        assert inventory.total == 0

    def test_resolve_checks_existence_before_listing(self):
        """Test call order against the directory"""
        directory = FakeDirectory({'alice': [make_key('A1')]})

        KeyInventoryResolver(directory).resolve('alice')

        assert directory.calls == [('get_principal', 'alice'), ('list_keys', 'alice')]

    def test_resolve_listing_failure(self):
        """Test that a listing failure becomes DirectoryUnavailable"""
        directory = FakeDirectory({'alice': [make_key('A1')]})
        directory.fail_listing = "Throttling: Rate exceeded"

        with pytest.raises(DirectoryUnavailable, match="Throttling"):
            KeyInventoryResolver(directory).resolve('alice')

    def test_lookup_returns_principal(self):
        """Test that lookup reports existence without listing keys"""
        directory = FakeDirectory({'alice': []})
        resolver = KeyInventoryResolver(directory)

        assert resolver.lookup('alice') == Principal('alice', exists=True)
        assert resolver.lookup('bob') == Principal('bob', exists=False)
        assert ('list_keys', 'alice') not in directory.calls

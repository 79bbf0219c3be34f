import unittest
from quorum_vault.owners import OwnerRegistry, is_null_identity
from quorum_vault.errors import InvalidConfiguration, Unauthorized

class TestOwnerRegistry(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.owners = ["alice", "bob", "carol"]

    def test_registry_creation(self):
        """Test registry creation and read-only accessors"""
        registry = OwnerRegistry(self.owners, 2)
        self.assertEqual(registry.owners, ("alice", "bob", "carol"))
        self.assertEqual(registry.threshold, 2)
        self.assertEqual(len(registry), 3)
        self.assertIsNotNone(registry.registry_id)

    def test_threshold_bounds(self):
        """Test threshold must be between 1 and owner count"""
        OwnerRegistry(self.owners, 1)
        OwnerRegistry(self.owners, 3)

        with self.assertRaises(InvalidConfiguration):
            OwnerRegistry(self.owners, 0)
        with self.assertRaises(InvalidConfiguration):
            OwnerRegistry(self.owners, 4)
        with self.assertRaises(InvalidConfiguration):
            OwnerRegistry(self.owners, -1)
        with self.assertRaises(InvalidConfiguration):
            OwnerRegistry(self.owners, True)
        with self.assertRaises(InvalidConfiguration):
            OwnerRegistry(self.owners, "2")

    def test_empty_owner_list(self):
        with self.assertRaises(InvalidConfiguration):
            OwnerRegistry([], 1)

    def test_duplicate_owners_rejected(self):
        with self.assertRaises(InvalidConfiguration):
            OwnerRegistry(["alice", "bob", "alice"], 2)

    def test_null_owners_rejected(self):
        """Test null and zero identities are rejected"""
        for bad in [None, "", "0", "0x" + "00" * 20, "00" * 33]:
            with self.assertRaises(InvalidConfiguration):
                OwnerRegistry(["alice", bad], 1)

    def test_non_string_owners_rejected(self):
        """Test owners that are not strings fail as configuration errors"""
        for bad in [0, 1, 0.0, ["bob"], {"id": "bob"}, b"bob", True]:
            with self.assertRaises(InvalidConfiguration):
                OwnerRegistry(["alice", bad], 1)

        with self.assertRaises(InvalidConfiguration):
            OwnerRegistry([1, 2], 1)

    def test_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            OwnerRegistry(self.owners, 0)

    def test_membership(self):
        """Test membership checks"""
        registry = OwnerRegistry(self.owners, 2)

        self.assertTrue(registry.is_owner("alice"))
        self.assertIn("carol", registry)
        self.assertFalse(registry.is_owner("mallory"))
        self.assertFalse(registry.is_owner(["alice"]))

        registry.require_owner("bob")
        with self.assertRaises(Unauthorized):
            registry.require_owner("mallory")

    def test_registry_id_deterministic(self):
        """Test registry ID ignores owner order but not threshold"""
        first = OwnerRegistry(["alice", "bob", "carol"], 2)
        second = OwnerRegistry(["carol", "alice", "bob"], 2)
        third = OwnerRegistry(["alice", "bob", "carol"], 3)

        self.assertEqual(first.registry_id, second.registry_id)
        self.assertNotEqual(first.registry_id, third.registry_id)

    def test_null_identity_helper(self):
        self.assertTrue(is_null_identity(None))
        self.assertTrue(is_null_identity("0x0000"))
        self.assertFalse(is_null_identity("0x0001"))
        self.assertFalse(is_null_identity("alice"))

if __name__ == '__main__':
    unittest.main()

"""Unit tests for gatehouse.core.security.PasswordHasher (Argon2id)."""

import unittest

from gatehouse.core.security import PasswordHasher
from tests.support import make_hasher


class TestPasswordHasher(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = make_hasher()

    def test_hash_is_salted_and_not_plaintext(self) -> None:
        h1 = self.hasher.hash("correct horse")
        h2 = self.hasher.hash("correct horse")
        self.assertNotEqual(h1, h2)
        self.assertNotIn("correct horse", h1)
        self.assertTrue(h1.startswith("$argon2id$"))

    def test_verify(self) -> None:
        h = self.hasher.hash("pw-123456")
        self.assertTrue(self.hasher.verify("pw-123456", h))
        self.assertFalse(self.hasher.verify("pw-654321", h))

    def test_verify_without_hash_is_false(self) -> None:
        self.assertFalse(self.hasher.verify("gatehouse-dummy-password", None))
        self.assertFalse(self.hasher.verify("anything", None))

    def test_verify_malformed_hash_is_false(self) -> None:
        self.assertFalse(self.hasher.verify("pw", "not-a-hash"))

    def test_needs_rehash_when_parameters_change(self) -> None:
        h = self.hasher.hash("pw-123456")
        self.assertFalse(self.hasher.needs_rehash(h))
        stronger = PasswordHasher(time_cost=2, memory_cost=8, parallelism=1)
        self.assertTrue(stronger.needs_rehash(h))
        self.assertTrue(self.hasher.needs_rehash("garbage"))


if __name__ == "__main__":
    unittest.main()

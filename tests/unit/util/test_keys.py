"""Unit tests for key generation and secret hashing."""

from federated.util.keys import generate_key, hash_secret, verify_secret


class TestGenerateKey:
    def test_keys_are_random(self):
        assert generate_key("password") != generate_key("password")

    def test_keys_are_url_safe(self):
        key = generate_key("password")

        assert key.replace("-", "").replace("_", "").isalnum()


class TestHashSecret:
    """Tests for hash_secret() and verify_secret()."""

    def test_hash_is_bcrypt(self):
        hashed = hash_secret("secret", rounds=4)

        assert hashed.startswith("$2b$04$")
        assert verify_secret("secret", hashed)

    def test_generated_password_verifies(self):
        """Passwords from generate_key fit within bcrypt's input limit."""
        password = generate_key("password")

        assert verify_secret(password, hash_secret(password, rounds=4))

    def test_wrong_secret_fails(self):
        hashed = hash_secret("secret", rounds=4)

        assert not verify_secret("other", hashed)

    def test_same_secret_hashes_differently(self):
        """Each hash gets its own salt."""
        assert hash_secret("secret", rounds=4) != hash_secret("secret", rounds=4)

    def test_malformed_hash_fails(self):
        assert not verify_secret("secret", "not-a-hash")

"""Unit tests for TokenCodec."""

from roster.domain.service import TokenCodec
from roster.domain.value import InviteSecret


class TestMint:
    """Tests for mint method."""

    def test_secrets_are_url_safe_and_long(self):
        """Minted secrets should be URL-safe with at least 256 bits of entropy."""
        codec = TokenCodec()

        secret = codec.mint()

        assert len(secret.root) >= 43
        assert all(c.isalnum() or c in "-_" for c in secret.root)

    def test_secrets_are_unique(self):
        """Two mints should never collide."""
        codec = TokenCodec()

        secrets = {codec.mint().root for _ in range(100)}

        assert len(secrets) == 100


class TestDigest:
    """Tests for digest method."""

    def test_digest_is_deterministic(self):
        """Equal secrets should hash to equal digests."""
        codec = TokenCodec()

        assert codec.digest("abc") == codec.digest("abc")
        assert codec.digest(InviteSecret(root="abc")) == codec.digest("abc")

    def test_digest_is_sha256_hex(self):
        """Digest should be the lowercase SHA-256 hex of the secret."""
        codec = TokenCodec()

        digest = codec.digest("abc")

        assert digest.root == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_different_secrets_have_different_digests(self):
        """Different secrets should hash differently."""
        codec = TokenCodec()

        assert codec.digest("abc") != codec.digest("abd")

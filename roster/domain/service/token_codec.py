"""Invite secret minting and hashing."""

import hashlib
import secrets

from roster.domain.value import InviteSecret, TokenDigest

from .base import Service


class TokenCodec(Service):
    """Mints opaque invite secrets and the digests stored in their place.

    Only digests are ever persisted; a lost secret cannot be recovered and
    its invite can only be replaced.
    """

    def __init__(self, secret_bytes: int = 32) -> None:
        """Initialize codec.

        Args:
            secret_bytes: Bytes of randomness per secret
        """
        self.secret_bytes = secret_bytes

    def mint(self) -> InviteSecret:
        """Generate a URL-safe secret from the OS CSPRNG."""
        return InviteSecret(root=secrets.token_urlsafe(self.secret_bytes))

    def digest(self, secret: InviteSecret | str) -> TokenDigest:
        """SHA-256 hex digest of a secret.

        Deterministic: equal secrets always produce equal digests.
        """
        raw = secret.root if isinstance(secret, InviteSecret) else secret
        return TokenDigest(root=hashlib.sha256(raw.encode("utf-8")).hexdigest())

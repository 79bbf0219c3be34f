import hashlib
import logging
from typing import Iterable, Tuple

from .errors import InvalidConfiguration, Unauthorized

logger = logging.getLogger(__name__)


def is_null_identity(identity) -> bool:
    """Check for a missing or all-zero identity"""
    if identity is None:
        return True
    if not isinstance(identity, str):
        return False
    digits = identity.lower()
    if digits.startswith("0x"):
        digits = digits[2:]
    return digits.strip("0") == ""


class OwnerRegistry:
    """Immutable set of wallet owners and the approval threshold"""

    def __init__(self, owners: Iterable[str], threshold: int):
        owners = list(owners)

        if not owners:
            raise InvalidConfiguration("Owner list must not be empty")
        if isinstance(threshold, bool) or not isinstance(threshold, int):
            raise InvalidConfiguration(f"Threshold must be an integer, got {threshold!r}")
        if threshold < 1:
            raise InvalidConfiguration(f"Threshold must be at least 1, got {threshold}")
        if threshold > len(owners):
            raise InvalidConfiguration(
                f"Threshold {threshold} exceeds owner count {len(owners)}"
            )

        seen = set()
        for owner in owners:
            if owner is not None and not isinstance(owner, str):
                raise InvalidConfiguration(f"Owner identity must be a string, got {owner!r}")
            if is_null_identity(owner):
                raise InvalidConfiguration("Owner identity must not be null or zero")
            if owner in seen:
                raise InvalidConfiguration(f"Duplicate owner {str(owner)[:16]}...")
            seen.add(owner)

        self._owners = tuple(owners)
        self._members = frozenset(seen)
        self._threshold = threshold
        self.registry_id = self._generate_registry_id()

    def _generate_registry_id(self) -> str:
        """Generate deterministic registry ID from owners and threshold"""
        hasher = hashlib.sha256()
        hasher.update(b"QUORUM_VAULT_V1")

        for owner in sorted(self._owners):
            hasher.update(owner.encode())
            hasher.update(b"\x00")

        hasher.update(self._threshold.to_bytes(4, 'little'))
        return hasher.hexdigest()

    @property
    def owners(self) -> Tuple[str, ...]:
        return self._owners

    @property
    def threshold(self) -> int:
        return self._threshold

    def is_owner(self, identity) -> bool:
        """Check if identity is a wallet owner"""
        try:
            return identity in self._members
        except TypeError:
            # unhashable identities are never owners
            return False

    def require_owner(self, identity) -> None:
        """Capability check for owner-only operations"""
        if not self.is_owner(identity):
            logger.debug("Rejected non-owner %s", identity)
            raise Unauthorized(identity)

    def __contains__(self, identity) -> bool:
        return self.is_owner(identity)

    def __len__(self) -> int:
        return len(self._owners)

    def to_dict(self) -> dict:
        return {
            'owners': list(self._owners),
            'threshold': self._threshold,
            'registry_id': self.registry_id,
        }

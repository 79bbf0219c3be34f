"""
Owner key utilities - secp256k1 identities and signed wallet actions
"""

import hashlib
import json
from typing import Tuple

from ecdsa import BadSignatureError, SECP256k1, SigningKey, VerifyingKey
from ecdsa.errors import MalformedPointError


class OwnerKey:
    """Owner key management utilities"""

    def __init__(self, private_key: bytes = None):
        if private_key:
            self.private_key = SigningKey.from_string(private_key, curve=SECP256k1)
        else:
            self.private_key = SigningKey.generate(curve=SECP256k1)

        self.public_key = self.private_key.get_verifying_key()

    @property
    def identity(self) -> str:
        """Owner identity: compressed public key in hex"""
        return self.get_public_key_hex()

    def get_public_key_hex(self) -> str:
        """Get compressed public key in hex format"""
        return self.public_key.to_string("compressed").hex()

    def get_private_key_hex(self) -> str:
        return self.private_key.to_string().hex()

    def sign_message(self, message: bytes) -> str:
        """Sign message (RFC 6979, SHA-256) and return signature in hex"""
        signature = self.private_key.sign_deterministic(message, hashfunc=hashlib.sha256)
        return signature.hex()

    @staticmethod
    def verify_signature(message: bytes, signature_hex: str, pubkey_hex: str) -> bool:
        """Verify signature against message and public key"""
        try:
            vk = VerifyingKey.from_string(bytes.fromhex(pubkey_hex), curve=SECP256k1)
            return vk.verify(bytes.fromhex(signature_hex), message, hashfunc=hashlib.sha256)
        except (ValueError, TypeError, BadSignatureError, MalformedPointError):
            return False

    @classmethod
    def from_hex(cls, private_key_hex: str) -> 'OwnerKey':
        return cls(bytes.fromhex(private_key_hex))

    @staticmethod
    def generate_key_pair() -> Tuple[str, str]:
        """Generate new key pair and return (private_key_hex, public_key_hex)"""
        key = OwnerKey()
        return key.get_private_key_hex(), key.get_public_key_hex()


def action_message(wallet_id: str, action: str, fields: dict) -> bytes:
    """Canonical bytes an owner signs to authorize a wallet action"""
    payload = {'wallet_id': wallet_id, 'action': action}
    payload.update(fields)
    return json.dumps(payload, sort_keys=True, separators=(',', ':')).encode()

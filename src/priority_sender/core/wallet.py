# src/priority_sender/core/wallet.py

import json

import base58
from solders.keypair import Keypair

from ..utils.logger import get_logger

logger = get_logger(__name__)


class Wallet:
    """ Represents the user's wallet with keypair for signing. """
    def __init__(self, private_key_bs58: str):
        try:
            private_key_bytes: bytes = base58.b58decode(private_key_bs58.strip())
        except ValueError as e:
            logger.error(f"Invalid base58 private key provided: {e}")
            raise ValueError("Invalid private key format") from e
        self.keypair = self._keypair_from_bytes(private_key_bytes)
        self.pubkey = self.keypair.pubkey()
        logger.info(f"Wallet initialized for pubkey: {self.pubkey}")

    @staticmethod
    def _keypair_from_bytes(secret: bytes) -> Keypair:
        if len(secret) != 64:
            raise ValueError(f"Private key must be 64 bytes, got {len(secret)}")
        try:
            return Keypair.from_bytes(secret)
        except ValueError as e:
            logger.error(f"Error initializing Keypair from private key: {e}")
            raise ValueError("Failed to create Keypair") from e

    @classmethod
    def from_keypair(cls, keypair: Keypair) -> "Wallet":
        return cls(base58.b58encode(bytes(keypair)).decode("ascii"))

    @classmethod
    def from_json_file(cls, path: str) -> "Wallet":
        """ Loads a Solana CLI keypair file (JSON list of 64 ints). """
        with open(path, "r") as f:
            try:
                secret_key_list = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Could not decode JSON keypair from {path}") from e
        if not isinstance(secret_key_list, list):
            raise ValueError(f"Keypair file {path} must contain a JSON list of integers")
        return cls(base58.b58encode(bytes(secret_key_list)).decode("ascii"))

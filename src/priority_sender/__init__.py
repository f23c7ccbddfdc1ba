"""
Priority Sender

Prices Solana transactions with a dynamically estimated priority fee, then
signs and submits them.
"""

__version__ = "0.1.0"

from .core import (
    SolanaClient,
    Wallet,
    PrioritySenderException,
    TransportError,
    DeserializationError,
    EmptyEstimateError,
    SubmissionRejectedError,
    InstructionBuilder,
    PriorityLevel,
    PriorityFeeEstimator,
    TransactionSender,
    build_instructions,
    send_tx,
)

__all__ = [
    "SolanaClient",
    "Wallet",
    "PrioritySenderException",
    "TransportError",
    "DeserializationError",
    "EmptyEstimateError",
    "SubmissionRejectedError",
    "InstructionBuilder",
    "PriorityLevel",
    "PriorityFeeEstimator",
    "TransactionSender",
    "build_instructions",
    "send_tx",
]

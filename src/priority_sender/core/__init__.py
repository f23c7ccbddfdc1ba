# src/priority_sender/core/__init__.py

from .client import SolanaClient
from .wallet import Wallet
from .exceptions import (
    PrioritySenderException,
    TransportError,
    DeserializationError,
    EmptyEstimateError,
    SubmissionRejectedError,
)
from .instruction_builder import InstructionBuilder
from .priority_fee import PriorityLevel, PriorityFeeEstimator, get_recent_priority_fee_estimate
from .transactions import TransactionSender, build_instructions, send_tx

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
    "get_recent_priority_fee_estimate",
    "TransactionSender",
    "build_instructions",
    "send_tx",
]

# src/priority_sender/core/priority_fee/estimator.py
"""
Priority fee estimation over the RPC provider's `getPriorityFeeEstimate`
side channel.

The request names the accounts the transaction touches rather than carrying a
serialized transaction, so it can be made before the transaction is built.
"""
import json
import math
from typing import Any, Dict, List, Optional, Sequence

import httpx
from solders.instruction import Instruction

from ..constants import MIN_LOOKBACK_SLOTS, MAX_LOOKBACK_SLOTS, MAX_COMPUTE_UNIT_PRICE
from ..exceptions import DeserializationError, EmptyEstimateError, TransportError
from ...utils.logger import get_logger
from . import PriorityLevel

logger = get_logger(__name__)


def account_keys(ix: Instruction) -> List[str]:
    """Base58 form of every account the instruction references, in order."""
    return [str(meta.pubkey) for meta in ix.accounts]


def build_priority_fee_request(
        instructions: Sequence[Instruction],
        priority_level: PriorityLevel = PriorityLevel.MEDIUM,
        lookback_slots: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Builds the estimate request body. Account keys are concatenated across
    instructions in order; duplicates are kept.
    """
    if lookback_slots is not None and not MIN_LOOKBACK_SLOTS <= lookback_slots <= MAX_LOOKBACK_SLOTS:
        raise ValueError(
            f"lookback_slots must be between {MIN_LOOKBACK_SLOTS} and {MAX_LOOKBACK_SLOTS}, got {lookback_slots}")

    keys: List[str] = []
    for ix in instructions:
        keys.extend(account_keys(ix))

    return {
        "transaction": None,
        "accountKeys": keys,
        "options": {
            "priorityLevel": priority_level.value,
            "includeAllPriorityFeeLevels": False,
            "transactionEncoding": "base64",
            "lookbackSlots": lookback_slots,
            "recommended": True,
            "includeVote": True,
        },
    }


def parse_priority_fee_response(body: Any) -> int:
    """Extracts `priorityFeeEstimate`, truncated toward zero and capped at u64 max."""
    if not isinstance(body, dict):
        raise DeserializationError(f"Expected a JSON object from fee service, got {type(body).__name__}")

    estimate = body.get("priorityFeeEstimate")
    if estimate is None:
        raise EmptyEstimateError("Fee service returned no priorityFeeEstimate")
    # bool is an int subclass; reject it explicitly
    if isinstance(estimate, bool) or not isinstance(estimate, (int, float)):
        raise DeserializationError(f"priorityFeeEstimate is not a number: {estimate!r}")
    if isinstance(estimate, float) and not math.isfinite(estimate):
        raise DeserializationError(f"priorityFeeEstimate is not finite: {estimate!r}")
    if estimate < 0:
        raise DeserializationError(f"priorityFeeEstimate is negative: {estimate!r}")
    # Saturate at the largest price a compute budget instruction can carry.
    return min(int(estimate), MAX_COMPUTE_UNIT_PRICE)


async def get_recent_priority_fee_estimate(
        http_client: httpx.AsyncClient,
        rpc_url: str,
        instructions: Sequence[Instruction],
        priority_level: PriorityLevel = PriorityLevel.MEDIUM,
        lookback_slots: Optional[int] = None,
) -> int:
    """
    Asks the fee service for a priority fee (micro-lamports per compute unit)
    for the accounts referenced by `instructions`.

    Raises:
        TransportError: connection failure, timeout or non-2xx status. A
            non-2xx reply is not parsed for an estimate, even if its body is
            JSON; it is a transport failure rather than an empty estimate.
        DeserializationError: the response body is not a usable JSON object.
        EmptyEstimateError: the service had no estimate for these accounts.
    """
    body = build_priority_fee_request(instructions, priority_level, lookback_slots)
    logger.info(f"Priority fee request: {json.dumps(body)}")

    try:
        response = await http_client.post(rpc_url, json=body)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise TransportError(f"Fee service returned HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise TransportError(f"Fee service request failed: {type(e).__name__}: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        raise DeserializationError(f"Fee service returned invalid JSON: {e}") from e
    logger.info(f"Priority fee response: {payload}")

    fee = parse_priority_fee_response(payload)
    logger.info(f"Priority fee: {fee} microlamports/CU ({priority_level.name})")
    return fee


class PriorityFeeEstimator:
    """
    Binds a shared httpx client to the fee endpoint and fixed request options.

    The endpoint is the RPC endpoint itself; there is no separate fee URL.
    Safe to share across concurrent sends: no state is kept between calls.
    """

    def __init__(self,
                 http_client: httpx.AsyncClient,
                 rpc_url: str,
                 priority_level: PriorityLevel = PriorityLevel.MEDIUM,
                 lookback_slots: Optional[int] = None):
        if lookback_slots is not None and not MIN_LOOKBACK_SLOTS <= lookback_slots <= MAX_LOOKBACK_SLOTS:
            raise ValueError(
                f"lookback_slots must be between {MIN_LOOKBACK_SLOTS} and {MAX_LOOKBACK_SLOTS}, got {lookback_slots}")
        if priority_level is PriorityLevel.UNSAFE_MAX:
            logger.warning("PriorityLevel.UNSAFE_MAX selected: fees will track the 100th percentile.")

        self.http_client = http_client
        self.rpc_url = rpc_url
        self.priority_level = priority_level
        self.lookback_slots = lookback_slots
        logger.info(
            f"PriorityFeeEstimator initialized: Level={self.priority_level.name}, Lookback={self.lookback_slots}")

    async def estimate(self, instructions: Sequence[Instruction]) -> int:
        return await get_recent_priority_fee_estimate(
            self.http_client,
            self.rpc_url,
            instructions,
            priority_level=self.priority_level,
            lookback_slots=self.lookback_slots,
        )

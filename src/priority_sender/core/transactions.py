# src/priority_sender/core/transactions.py

from typing import Iterable, List, Optional

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.signature import Signature
from solders.transaction import Transaction

from .client import SolanaClient
from .constants import DEFAULT_COMPUTE_UNIT_LIMIT, MAX_COMPUTE_UNIT_LIMIT, SEND_TX_OPTS
from .exceptions import PrioritySenderException
from .instruction_builder import InstructionBuilder
from .priority_fee import PriorityFeeEstimator
from ..utils.logger import get_logger

logger = get_logger(__name__)


def build_instructions(
        instructions: Iterable[Instruction],
        cu_limit: int,
        cu_price: Optional[int] = None,
) -> List[Instruction]:
    """
    Returns a new instruction list: compute unit limit first, the compute unit
    price second when given, then the caller's instructions in their original
    order. The input is consumed into the result, never mutated.
    """
    final_ixs: List[Instruction] = [InstructionBuilder.set_compute_unit_limit(cu_limit)]
    if cu_price is not None:
        final_ixs.append(InstructionBuilder.set_compute_unit_price(cu_price))
    final_ixs.extend(instructions)
    return final_ixs


async def send_tx(
        client: SolanaClient,
        estimator: Optional[PriorityFeeEstimator],
        instructions: Iterable[Instruction],
        signer: Keypair,
        cu_limit: int,
        priority_fee: bool = True,
        label: str = "Transaction",
) -> Signature:
    """
    Prices, signs and broadcasts `instructions` with `signer` as fee payer.

    Network calls, in order: fee estimate (only if `priority_fee`), latest
    blockhash, send. The first failure is raised unchanged and no later call
    is made. Returns the signature once the node accepts the transaction.
    """
    if not 0 <= cu_limit <= MAX_COMPUTE_UNIT_LIMIT:
        raise ValueError(f"cu_limit must fit in u32, got {cu_limit}")
    if priority_fee and estimator is None:
        raise ValueError("priority_fee requested but no PriorityFeeEstimator configured")

    caller_ixs = list(instructions)

    cu_price: Optional[int] = None
    try:
        if priority_fee:
            # Compute budget instructions reference no accounts, so estimating
            # on the caller's instructions sees the same account set.
            cu_price = await estimator.estimate(caller_ixs)

        final_ixs = build_instructions(caller_ixs, cu_limit, cu_price)
        logger.info(
            f"{label}: {len(final_ixs)} instructions, CU Limit={cu_limit}, "
            f"CU Price={cu_price if cu_price is not None else 'none'}")

        tx = Transaction.new_with_payer(final_ixs, signer.pubkey())
        # Fetched only once the instruction list is final, right before signing.
        blockhash = await client.get_latest_blockhash()
        tx.sign([signer], blockhash)

        signature = await client.send_transaction(tx, SEND_TX_OPTS)
    except PrioritySenderException as e:
        logger.error(f"{label}: {type(e).__name__}: {e.message}")
        raise

    logger.info(f"{label}: Sent successfully. Signature: {signature}")
    return signature


class TransactionSender:
    """
    Holds the long-lived collaborators for sending: the RPC client and the fee
    estimator. Both may be shared with other senders and concurrent calls.
    """

    def __init__(self,
                 client: SolanaClient,
                 estimator: Optional[PriorityFeeEstimator] = None,
                 cu_limit: int = DEFAULT_COMPUTE_UNIT_LIMIT,
                 use_priority_fee: bool = True):
        if use_priority_fee and estimator is None:
            raise ValueError("use_priority_fee=True requires a PriorityFeeEstimator")
        self.client = client
        self.estimator = estimator
        self.cu_limit = cu_limit
        self.use_priority_fee = use_priority_fee
        logger.info(
            f"TransactionSender Init: CU Limit={self.cu_limit}, PriorityFee={self.use_priority_fee}")

    async def send(self,
                   instructions: Iterable[Instruction],
                   signer: Keypair,
                   cu_limit: Optional[int] = None,
                   priority_fee: Optional[bool] = None,
                   label: str = "Transaction") -> Signature:
        return await send_tx(
            self.client,
            self.estimator,
            instructions,
            signer,
            cu_limit=self.cu_limit if cu_limit is None else cu_limit,
            priority_fee=self.use_priority_fee if priority_fee is None else priority_fee,
            label=label,
        )

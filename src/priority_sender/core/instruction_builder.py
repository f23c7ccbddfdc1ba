# src/priority_sender/core/instruction_builder.py
from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey
from solders.system_program import transfer, TransferParams

from .constants import (
    COMPUTE_BUDGET_PROGRAM_ID,
    MEMO_PROGRAM_ID,
    MAX_COMPUTE_UNIT_LIMIT,
    MAX_COMPUTE_UNIT_PRICE,
)

# --- ComputeBudget instruction discriminators ---
SET_COMPUTE_UNIT_LIMIT_DISCRIMINATOR = b'\x02'
SET_COMPUTE_UNIT_PRICE_DISCRIMINATOR = b'\x03'


class InstructionBuilder:
    @staticmethod
    def set_compute_unit_limit(units: int) -> Instruction:
        """Creates an instruction to set the compute unit limit for the transaction."""
        if not 0 <= units <= MAX_COMPUTE_UNIT_LIMIT:
            raise ValueError(f"Compute unit limit must fit in u32, got {units}")
        # 8-bit discriminator, 32-bit units
        data = SET_COMPUTE_UNIT_LIMIT_DISCRIMINATOR + units.to_bytes(4, 'little')
        return Instruction(
            program_id=COMPUTE_BUDGET_PROGRAM_ID,
            accounts=[],  # No accounts needed for this instruction
            data=data
        )

    @staticmethod
    def set_compute_unit_price(micro_lamports: int) -> Instruction:
        """Creates an instruction to set the compute unit price (priority fee) for the transaction."""
        if not 0 <= micro_lamports <= MAX_COMPUTE_UNIT_PRICE:
            raise ValueError(f"Compute unit price must fit in u64, got {micro_lamports}")
        # 8-bit discriminator, 64-bit micro_lamports
        data = SET_COMPUTE_UNIT_PRICE_DISCRIMINATOR + micro_lamports.to_bytes(8, 'little')
        return Instruction(
            program_id=COMPUTE_BUDGET_PROGRAM_ID,
            accounts=[],
            data=data
        )

    @staticmethod
    def transfer(from_pubkey: Pubkey, to_pubkey: Pubkey, lamports: int) -> Instruction:
        """System program SOL transfer."""
        if lamports <= 0:
            raise ValueError(f"Transfer amount must be positive, got {lamports}")
        return transfer(TransferParams(from_pubkey=from_pubkey, to_pubkey=to_pubkey, lamports=lamports))

    @staticmethod
    def memo(text: str, signer: Pubkey) -> Instruction:
        """SPL memo instruction signed by `signer`."""
        return Instruction(
            program_id=MEMO_PROGRAM_ID,
            accounts=[AccountMeta(pubkey=signer, is_signer=True, is_writable=False)],
            data=text.encode("utf-8")
        )

"""
Test suite for instruction construction.
"""

import pytest
from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

from priority_sender.core.constants import COMPUTE_BUDGET_PROGRAM_ID, MEMO_PROGRAM_ID
from priority_sender.core.instruction_builder import InstructionBuilder


class TestComputeBudget:

    @pytest.mark.parametrize("units", [0, 200_000, 1_400_000, 2**32 - 1])
    def test_limit_matches_solders(self, units):
        assert InstructionBuilder.set_compute_unit_limit(units) == set_compute_unit_limit(units)

    @pytest.mark.parametrize("price", [0, 1, 5000, 2**64 - 1])
    def test_price_matches_solders(self, price):
        assert InstructionBuilder.set_compute_unit_price(price) == set_compute_unit_price(price)

    def test_no_accounts(self):
        ix = InstructionBuilder.set_compute_unit_price(5000)

        assert ix.program_id == COMPUTE_BUDGET_PROGRAM_ID
        assert ix.accounts == []

    @pytest.mark.parametrize("units", [-1, 2**32])
    def test_limit_range(self, units):
        with pytest.raises(ValueError):
            InstructionBuilder.set_compute_unit_limit(units)

    @pytest.mark.parametrize("price", [-1, 2**64])
    def test_price_range(self, price):
        with pytest.raises(ValueError):
            InstructionBuilder.set_compute_unit_price(price)


class TestUserInstructions:

    def test_transfer_accounts(self):
        sender, recipient = Keypair().pubkey(), Pubkey.new_unique()

        ix = InstructionBuilder.transfer(sender, recipient, 1_000)

        assert ix.program_id == SYSTEM_PROGRAM_ID
        assert [meta.pubkey for meta in ix.accounts] == [sender, recipient]

    def test_transfer_rejects_zero(self):
        with pytest.raises(ValueError):
            InstructionBuilder.transfer(Pubkey.new_unique(), Pubkey.new_unique(), 0)

    def test_memo(self):
        signer = Pubkey.new_unique()

        ix = InstructionBuilder.memo("gm", signer)

        assert ix.program_id == MEMO_PROGRAM_ID
        assert bytes(ix.data) == b"gm"
        assert ix.accounts[0].pubkey == signer
        assert ix.accounts[0].is_signer

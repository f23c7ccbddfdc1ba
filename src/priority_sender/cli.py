# src/priority_sender/cli.py

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import httpx
from solders.instruction import Instruction
from solders.pubkey import Pubkey

from .config import load_config
from .core.client import SolanaClient
from .core.exceptions import PrioritySenderException
from .core.instruction_builder import InstructionBuilder
from .core.priority_fee import PriorityFeeEstimator, PriorityLevel
from .core.transactions import TransactionSender
from .core.wallet import Wallet
from .utils.logger import configure_console_logging, get_logger, setup_file_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="priority-sender",
        description="Send a Solana transaction with a dynamically estimated priority fee")
    parser.add_argument("--env-file", help="Path to a .env file (default: search from cwd)")
    parser.add_argument("--cu-limit", type=int, help="Override COMPUTE_UNIT_LIMIT")
    parser.add_argument("--no-priority-fee", action="store_true", help="Send without a compute unit price")
    parser.add_argument("--priority-level", choices=[level.name for level in PriorityLevel],
                        help="Override PRIORITY_LEVEL")

    subparsers = parser.add_subparsers(dest="command", required=True)

    transfer_parser = subparsers.add_parser("transfer", help="Transfer SOL")
    transfer_parser.add_argument("--to", required=True, help="Recipient public key")
    transfer_parser.add_argument("--lamports", type=int, required=True, help="Amount in lamports")

    memo_parser = subparsers.add_parser("memo", help="Post an SPL memo")
    memo_parser.add_argument("--text", required=True, help="Memo text")

    return parser


def build_user_instructions(args: argparse.Namespace, wallet: Wallet) -> List[Instruction]:
    if args.command == "transfer":
        recipient = Pubkey.from_string(args.to)
        return [InstructionBuilder.transfer(wallet.pubkey, recipient, args.lamports)]
    return [InstructionBuilder.memo(args.text, wallet.pubkey)]


async def run(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.env_file)
    except ValueError as e:
        logger.critical(f"Config load failed: {e}")
        return 1

    # Apply CLI overrides
    if args.cu_limit is not None:
        cfg["COMPUTE_UNIT_LIMIT"] = args.cu_limit; logger.info(f"CLI Override: COMPUTE_UNIT_LIMIT = {args.cu_limit}")
    if args.no_priority_fee:
        cfg["USE_PRIORITY_FEE"] = False; logger.info("CLI Override: USE_PRIORITY_FEE = False")
    if args.priority_level:
        cfg["PRIORITY_LEVEL"] = args.priority_level; logger.info(f"CLI Override: PRIORITY_LEVEL = {args.priority_level}")

    level = getattr(logging, cfg["LOG_LEVEL"])
    configure_console_logging(level)
    if cfg["LOG_FILE"]:
        setup_file_logging(cfg["LOG_FILE"], level)

    try:
        wallet = Wallet(cfg["SOLANA_PRIVATE_KEY"])
        instructions = build_user_instructions(args, wallet)
    except ValueError as e:
        logger.critical(f"Initialization error: {e}")
        return 1

    rpc_endpoint = cfg["SOLANA_NODE_RPC_ENDPOINT"]
    async with SolanaClient(rpc_endpoint, commitment=cfg["RPC_COMMITMENT"]) as client, \
            httpx.AsyncClient() as http_client:
        estimator: Optional[PriorityFeeEstimator] = None
        if cfg["USE_PRIORITY_FEE"]:
            estimator = PriorityFeeEstimator(
                http_client,
                rpc_endpoint,
                priority_level=PriorityLevel[cfg["PRIORITY_LEVEL"]],
                lookback_slots=cfg["PRIORITY_FEE_LOOKBACK_SLOTS"],
            )
        sender = TransactionSender(
            client,
            estimator,
            cu_limit=cfg["COMPUTE_UNIT_LIMIT"],
            use_priority_fee=cfg["USE_PRIORITY_FEE"],
        )
        try:
            signature = await sender.send(instructions, wallet.keypair, label=args.command.capitalize())
        except (PrioritySenderException, ValueError) as e:
            print(f"{type(e).__name__}: {e}", file=sys.stderr)
            return 1

    print(signature)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_console_logging()
    try:
        exit_code = asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Cancelled.")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

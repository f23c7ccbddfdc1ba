# src/priority_sender/core/client.py

from typing import Optional

from solders.hash import Hash
from solders.rpc.responses import GetLatestBlockhashResp, SendTransactionResp
from solders.signature import Signature
from solders.transaction import Transaction

from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.core import RPCException, RPCNoResultException
from solana.rpc.types import TxOpts

from .constants import SEND_TX_OPTS
from .exceptions import SubmissionRejectedError, TransportError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class SolanaClient:
    """
    Thin wrapper over solana-py's AsyncClient exposing the two calls a send
    needs. Each method makes exactly one RPC round-trip and raises classified
    errors instead of retrying.
    """

    def __init__(
        self,
        rpc_endpoint: str,
        commitment: Commitment = Confirmed,
        timeout_seconds: Optional[float] = None,
        async_client: Optional[AsyncClient] = None,
    ) -> None:
        self._rpc_endpoint = rpc_endpoint
        self.commitment = commitment
        if async_client is None:
            if timeout_seconds is None:
                async_client = AsyncClient(rpc_endpoint, commitment=commitment)
            else:
                async_client = AsyncClient(rpc_endpoint, commitment=commitment, timeout=timeout_seconds)
        self.async_client = async_client
        logger.info(f"SolanaClient initialized: {rpc_endpoint} @ {commitment}")

    @property
    def rpc_endpoint(self) -> str:
        return self._rpc_endpoint

    async def __aenter__(self) -> "SolanaClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.async_client.close()
        logger.info("SolanaClient connection closed.")

    async def get_latest_blockhash(self) -> Hash:
        """Latest blockhash at the client's configured commitment."""
        try:
            resp: GetLatestBlockhashResp = await self.async_client.get_latest_blockhash(
                self.commitment
            )
        except SolanaRpcException as e:
            raise TransportError(f"get_latest_blockhash failed: {e}") from e
        except RPCException as e:
            raise TransportError(f"get_latest_blockhash RPC error: {e}") from e

        if resp is None or resp.value is None:
            raise TransportError("get_latest_blockhash returned no value")
        blockhash = resp.value.blockhash
        logger.debug(f"Got blockhash {blockhash} (last valid height {resp.value.last_valid_block_height})")
        return blockhash

    async def send_transaction(
        self,
        transaction: Transaction,
        opts: TxOpts = SEND_TX_OPTS,
    ) -> Signature:
        """Broadcasts a signed transaction once. Returns on node acceptance, not confirmation."""
        try:
            resp: SendTransactionResp = await self.async_client.send_raw_transaction(
                bytes(transaction), opts=opts
            )
        except (RPCException, RPCNoResultException) as e:
            raise SubmissionRejectedError(f"Transaction rejected: {e}") from e
        except SolanaRpcException as e:
            raise TransportError(f"send_transaction failed: {e}") from e

        logger.info(f"Tx sent: {resp.value}")
        return resp.value

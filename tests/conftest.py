"""
Pytest configuration and shared fixtures for the test suite.
"""

import json
from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from priority_sender.core.client import SolanaClient
from priority_sender.core.priority_fee import PriorityFeeEstimator

RPC_URL = "https://rpc.example.com/?api-key=test"


# ============================================================================
# Key Fixtures
# ============================================================================

@pytest.fixture
def payer() -> Keypair:
    return Keypair()


@pytest.fixture
def recipient() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def blockhash() -> Hash:
    return Hash.new_unique()


# ============================================================================
# Network Fixtures
# ============================================================================

@pytest.fixture
def sent_signature() -> Signature:
    return Signature.new_unique()


@pytest.fixture
def mock_client(blockhash, sent_signature) -> MagicMock:
    """A SolanaClient whose RPC calls are recorded instead of sent."""
    client = MagicMock(spec=SolanaClient)
    client.rpc_endpoint = RPC_URL
    client.get_latest_blockhash = AsyncMock(return_value=blockhash)
    client.send_transaction = AsyncMock(return_value=sent_signature)
    return client


class FeeService:
    """
    Stand-in for the fee-estimation endpoint behind an httpx.MockTransport.
    Records every request body it receives.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self._handler = handler
        self.requests: List[httpx.Request] = []

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


def respond_json(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status_code, json=payload)


def raise_timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)


@pytest.fixture
def fee_service_factory():
    """Builds a recording FeeService and a PriorityFeeEstimator wired to it."""
    def factory(handler, **estimator_kwargs):
        service = FeeService(handler)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(service))
        return service, PriorityFeeEstimator(http_client, RPC_URL, **estimator_kwargs)

    return factory

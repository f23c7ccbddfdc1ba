from solders.pubkey import Pubkey
from solana.rpc.commitment import Confirmed
from solana.rpc.types import TxOpts

# Solana-wide constants
SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")
COMPUTE_BUDGET_PROGRAM_ID = Pubkey.from_string("ComputeBudget111111111111111111111111111111")
MEMO_PROGRAM_ID = Pubkey.from_string("MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr")

MAX_COMPUTE_UNIT_LIMIT = 2**32 - 1
MAX_COMPUTE_UNIT_PRICE = 2**64 - 1
DEFAULT_COMPUTE_UNIT_LIMIT = 200_000

# Fee-estimation lookback window accepted by the service (slots).
MIN_LOOKBACK_SLOTS = 1
MAX_LOOKBACK_SLOTS = 150

# Fixed send policy: preflight at Confirmed, base64 (send_raw_transaction always
# encodes base64), no node-side resubmission, no min context slot, and return
# as soon as the node accepts the transaction.
SEND_TX_OPTS = TxOpts(
    skip_confirmation=True,
    skip_preflight=False,
    preflight_commitment=Confirmed,
    max_retries=0,
)

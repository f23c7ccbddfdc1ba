# src/priority_sender/config.py

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .core.constants import (
    DEFAULT_COMPUTE_UNIT_LIMIT,
    MAX_COMPUTE_UNIT_LIMIT,
    MIN_LOOKBACK_SLOTS,
    MAX_LOOKBACK_SLOTS,
)
from .core.priority_fee import PriorityLevel
from .utils.logger import get_logger

logger = get_logger(__name__)

# --- Required (MUST be in .env or environment) ---
# SOLANA_NODE_RPC_ENDPOINT also serves the priority fee estimate; there is no
# separate fee endpoint.
REQUIRED_VARS = ("SOLANA_NODE_RPC_ENDPOINT", "SOLANA_PRIVATE_KEY")

# --- Optional settings and their defaults ---
OPTIONAL_DEFAULTS: Dict[str, Any] = {
    "COMPUTE_UNIT_LIMIT": DEFAULT_COMPUTE_UNIT_LIMIT,
    "USE_PRIORITY_FEE": True,
    "PRIORITY_LEVEL": PriorityLevel.default().name,
    "RPC_COMMITMENT": "confirmed",
    "LOG_LEVEL": "INFO",
}

# Optional settings that default to unset
OPTIONAL_INT_VARS = ("PRIORITY_FEE_LOOKBACK_SLOTS",)
OPTIONAL_STR_VARS = ("LOG_FILE",)

VALID_COMMITMENTS = ("processed", "confirmed", "finalized")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off")


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _coerce(var: str, raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        return _parse_bool(raw)
    if isinstance(default, int):
        value = int(raw)
        if var == "COMPUTE_UNIT_LIMIT" and not 0 <= value <= MAX_COMPUTE_UNIT_LIMIT:
            raise ValueError(f"out of u32 range: {value}")
        return value
    value = raw.strip()
    if var == "PRIORITY_LEVEL":
        return PriorityLevel.from_str(value).name
    if var == "RPC_COMMITMENT" and value.lower() not in VALID_COMMITMENTS:
        raise ValueError(f"must be one of {VALID_COMMITMENTS}")
    if var == "RPC_COMMITMENT":
        return value.lower()
    if var == "LOG_LEVEL" and value.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"must be one of {VALID_LOG_LEVELS}")
    if var == "LOG_LEVEL":
        return value.upper()
    return value


def load_config(dotenv_path: Optional[str] = None) -> Dict[str, Any]:
    """Load and validate the sender configuration from .env and the environment."""
    # Existing environment variables win over .env entries.
    load_dotenv(dotenv_path=dotenv_path)

    # 1) Required core values
    config: Dict[str, Any] = {}
    for var in REQUIRED_VARS:
        val = os.getenv(var)
        if not val:
            raise ValueError(f"Missing required config var: {var}")
        config[var] = val

    # 2) All other optional settings
    for var, default in OPTIONAL_DEFAULTS.items():
        raw = os.getenv(var)
        if raw is None or raw == "":
            config[var] = default
            continue
        try:
            config[var] = _coerce(var, raw, default)
        except ValueError as e:
            logger.warning(f"Config warning: invalid value for {var} ({e}), using default {default}")
            config[var] = default

    for var in OPTIONAL_INT_VARS:
        raw = os.getenv(var)
        config[var] = None
        if raw:
            try:
                value = int(raw)
            except ValueError:
                logger.warning(f"Config warning: invalid integer for {var}: {raw!r}, leaving unset")
                continue
            if not MIN_LOOKBACK_SLOTS <= value <= MAX_LOOKBACK_SLOTS:
                logger.warning(
                    f"Config warning: {var} must be {MIN_LOOKBACK_SLOTS}-{MAX_LOOKBACK_SLOTS}, got {value}, leaving unset")
                continue
            config[var] = value

    for var in OPTIONAL_STR_VARS:
        config[var] = os.getenv(var) or None

    logger.info("Configuration loaded successfully.")
    return config

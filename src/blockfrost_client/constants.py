"""Network base URLs and the user agent sent on every request."""

from __future__ import annotations

__version__ = "0.1.0"

CARDANO_MAINNET = "https://cardano-mainnet.blockfrost.io/api/v0"
CARDANO_PREPROD = "https://cardano-preprod.blockfrost.io/api/v0"
CARDANO_PREVIEW = "https://cardano-preview.blockfrost.io/api/v0"
CARDANO_TESTNET = "https://cardano-testnet.blockfrost.io/api/v0"
IPFS = "https://ipfs.blockfrost.io/api/v0"

# project id prefix -> base URL
NETWORKS: dict[str, str] = {
    "mainnet": CARDANO_MAINNET,
    "preprod": CARDANO_PREPROD,
    "preview": CARDANO_PREVIEW,
    "testnet": CARDANO_TESTNET,
    "ipfs": IPFS,
}

USER_AGENT = f"blockfrost-python-client/{__version__}"

DEFAULT_EXPECTED_ERROR_CODES: frozenset[int] = frozenset({400, 403, 404, 418, 429, 500})

# server-side maximum page size
MAX_COUNT = 100

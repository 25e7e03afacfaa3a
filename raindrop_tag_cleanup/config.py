"""Configuration constants, environment lookup and allowlist loading."""

import os
from typing import Optional

# Raindrop.io OAuth app registered for this tool
CLIENT_ID = "642d85afcadd2b30e6dff9a5"
REDIRECT_PORT = 12705
REDIRECT_PATH = "/oauth"
REDIRECT_URI = f"http://localhost:{REDIRECT_PORT}{REDIRECT_PATH}"

CLIENT_SECRET_ENV = "RAINDROP_CLIENT_SECRET"

# Raindrop allows 120 requests/minute per authenticated user
DELETE_DELAY = 0.51
AUTH_POLL_INTERVAL = 3


def get_client_secret() -> str:
    """Return the OAuth client secret from the environment.

    Raises:
        ValueError: If the environment variable is missing or empty.
    """
    secret = os.getenv(CLIENT_SECRET_ENV)
    if not secret:
        raise ValueError(f"Please set {CLIENT_SECRET_ENV} environment variable")
    return secret


def load_allowlist(path: Optional[str]) -> frozenset[str]:
    """Load the set of tags to keep from a newline-delimited file.

    Args:
        path: Path to the allowlist file. Empty or None means no allowlist.

    Returns:
        Set of stripped, non-empty tag names

    Raises:
        OSError: If the file can't be read.
    """
    if not path:
        return frozenset()

    with open(path, encoding="utf-8") as f:
        return frozenset(line.strip() for line in f if line.strip())

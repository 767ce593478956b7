"""API configuration. The key is read from the environment, never stored here."""

import os


class APIConfig:
    # Get your API key from the DeFindex team and export it as DEFINDEX_API_KEY
    API_KEY = os.environ.get("DEFINDEX_API_KEY")
    BASE_URL = os.environ.get("DEFINDEX_API_URL", "https://api.defindex.io")
    DEFAULT_NETWORK = "mainnet"

    # No timeout is enforced on requests; a hung request stays pending
    REQUEST_TIMEOUT = None

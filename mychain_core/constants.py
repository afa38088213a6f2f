"""
Fixed chain parameters for MyChain.

These values come from the chain's module definition and are not
environment-configurable; endpoints and gas price live in config.settings.
"""

MODULE_NAME = "mychain"

# Bech32 human-readable prefix and the length of "1" + data + checksum
# for a 20-byte account hash (32 data chars + 6 checksum chars).
ADDRESS_PREFIX = "mychain"
ADDRESS_SEPARATOR = "1"
ADDRESS_SUFFIX_LENGTH = 38
ADDRESS_LENGTH = len(ADDRESS_PREFIX) + len(ADDRESS_SEPARATOR) + ADDRESS_SUFFIX_LENGTH

NATIVE_DENOM = "mychain"
DEFAULT_GAS_PRICE = "0.1umychain"

DEFAULT_RPC_ENDPOINT = "http://localhost:26657"
DEFAULT_REST_ENDPOINT = "http://localhost:1317"
DEFAULT_CHAIN_ID = "mychain-1"

# BIP44 coin type shared by Cosmos SDK chains
COSMOS_COIN_TYPE = 118
MNEMONIC_WORD_COUNT = 12

TYPE_URL_PREFIX = f"/{MODULE_NAME}.{MODULE_NAME}."

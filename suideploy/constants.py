"""
suideploy Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Sui CLI
SUI_BINARY = "sui"
FALLBACK_NETWORK = "localnet"
ACTIVE_ENV_MARKER = "*"
ENV_TABLE_DELIMITERS = ("│", "|")

# Gas budgets (MIST)
PUBLISH_GAS_BUDGET = 20000000
AUTHORIZE_UPGRADE_GAS_BUDGET = 20000000
UPGRADE_GAS_BUDGET = 20000000

# Framework package that owns upgrade authorization
SYSTEM_PACKAGE_ID = "0x2"
AUTHORIZE_UPGRADE_MODULE = "package"
AUTHORIZE_UPGRADE_FUNCTION = "authorize_upgrade"

# Object type markers looked up in objectChanges
PUBLISHER_TYPE = "Publisher"
ADMIN_CAP_TYPE = "AdminCap"
GLOBAL_CONFIG_TYPE = "GlobalConfig"
UPGRADE_CAP_TYPE = "UpgradeCap"

# Move project layout
MOVE_MANIFEST = "Move.toml"
BUILD_DIR = "build"

# Persisted configuration
ENV_FILE = ".env"
ENV_TEMPLATE_FILE = "env.example"

ENV_NETWORK = "SUI_NETWORK"
ENV_PACKAGE_ID = "PACKAGE_ID"
ENV_PUBLISHER_ID = "PUBLISHER_ID"
ENV_ADMIN_CAP_ID = "ADMIN_CAP_ID"
ENV_GLOBAL_CONFIG_ID = "GLOBAL_CONFIG_ID"
ENV_UPGRADE_CAP_ID = "UPGRADE_CAP_ID"

# Test client configuration
ENV_RPC_URL = "SUI_RPC_URL"
ENV_TEST_PRIVATE_KEY = "TEST_PRIVATE_KEY"
UNSET_PACKAGE_ID = "0x0"

FULLNODE_URLS = {
    "localnet": "http://127.0.0.1:9000",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "mainnet": "https://fullnode.mainnet.sui.io:443",
}

# RPC behaviour
RPC_TIMEOUT = 30.0
TX_GAS_BUDGET = 10000000
TX_CONFIRM_MAX_ATTEMPTS = 20
TX_CONFIRM_DELAY = 0.5

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

"""Minimal ABIs for the contracts the adapters touch."""


def _fn(name, inputs, outputs=(), mutability="nonpayable"):
    return {
        "type": "function",
        "name": name,
        "inputs": list(inputs),
        "outputs": list(outputs),
        "stateMutability": mutability,
    }


def _arg(name, type_, components=None):
    arg = {"name": name, "type": type_}
    if components is not None:
        arg["components"] = components
    return arg


ERC20_ABI = [
    _fn("balanceOf", [_arg("account", "address")], [_arg("", "uint256")], "view"),
]

OWNABLE_ABI = [
    _fn("owner", [], [_arg("", "address")], "view"),
]

BENEFICIARY_FEE_ROUTER_ABI = [
    _fn("owner", [], [_arg("", "address")], "view"),
    _fn("recipient", [], [_arg("", "address")], "view"),
    _fn("setRecipient", [_arg("newRecipient", "address")]),
    _fn("forward", [_arg("asset", "address")], [_arg("amount", "uint256")]),
]

# Clanker v4

_CLANKER_TOKEN_CONFIG = [
    _arg("tokenAdmin", "address"),
    _arg("name", "string"),
    _arg("symbol", "string"),
    _arg("salt", "bytes32"),
    _arg("image", "string"),
    _arg("metadata", "string"),
    _arg("context", "string"),
    _arg("originatingChainId", "uint256"),
]

_CLANKER_POOL_CONFIG = [
    _arg("hook", "address"),
    _arg("pairedToken", "address"),
    _arg("tickIfToken0IsClanker", "int24"),
    _arg("tickSpacing", "int24"),
    _arg("poolData", "bytes"),
]

_CLANKER_LOCKER_CONFIG = [
    _arg("locker", "address"),
    _arg("rewardAdmins", "address[]"),
    _arg("rewardRecipients", "address[]"),
    _arg("rewardBps", "uint16[]"),
    _arg("tickLower", "int24[]"),
    _arg("tickUpper", "int24[]"),
    _arg("positionBps", "uint16[]"),
    _arg("lockerData", "bytes"),
]

_CLANKER_MEV_MODULE_CONFIG = [
    _arg("mevModule", "address"),
    _arg("mevModuleData", "bytes"),
]

_CLANKER_EXTENSION_CONFIG = [
    _arg("extension", "address"),
    _arg("msgValue", "uint256"),
    _arg("extensionBps", "uint16"),
    _arg("extensionData", "bytes"),
]

CLANKER_FACTORY_ABI = [
    _fn(
        "deployToken",
        [
            _arg(
                "deploymentConfig",
                "tuple",
                [
                    _arg("tokenConfig", "tuple", _CLANKER_TOKEN_CONFIG),
                    _arg("poolConfig", "tuple", _CLANKER_POOL_CONFIG),
                    _arg("lockerConfig", "tuple", _CLANKER_LOCKER_CONFIG),
                    _arg("mevModuleConfig", "tuple", _CLANKER_MEV_MODULE_CONFIG),
                    _arg("extensionConfigs", "tuple[]", _CLANKER_EXTENSION_CONFIG),
                ],
            )
        ],
        [_arg("tokenAddress", "address")],
        "payable",
    ),
    {
        "type": "event",
        "name": "TokenCreated",
        "anonymous": False,
        "inputs": [
            {"name": "msgSender", "type": "address", "indexed": False},
            {"name": "tokenAddress", "type": "address", "indexed": True},
            {"name": "tokenAdmin", "type": "address", "indexed": True},
            {"name": "tokenImage", "type": "string", "indexed": False},
            {"name": "tokenName", "type": "string", "indexed": False},
            {"name": "tokenSymbol", "type": "string", "indexed": False},
            {"name": "tokenMetadata", "type": "string", "indexed": False},
            {"name": "tokenContext", "type": "string", "indexed": False},
            {"name": "startingTick", "type": "int24", "indexed": False},
            {"name": "poolHook", "type": "address", "indexed": False},
            {"name": "poolId", "type": "bytes32", "indexed": False},
            {"name": "pairedToken", "type": "address", "indexed": False},
            {"name": "locker", "type": "address", "indexed": False},
            {"name": "mevModule", "type": "address", "indexed": False},
            {"name": "extensionsSupply", "type": "uint256", "indexed": False},
            {"name": "extensions", "type": "address[]", "indexed": False},
        ],
    },
]

CLANKER_LP_LOCKER_ABI = [
    _fn(
        "updateRewardRecipient",
        [_arg("token", "address"), _arg("rewardIndex", "uint256"), _arg("newRecipient", "address")],
    ),
]

CLANKER_FEE_LOCKER_ABI = [
    _fn("availableFees", [_arg("feeOwner", "address"), _arg("token", "address")], [_arg("", "uint256")], "view"),
    _fn("claim", [_arg("feeOwner", "address"), _arg("token", "address")]),
]

CLANKER_VAULT_ABI = [
    _fn("editAllocationAdmin", [_arg("token", "address"), _arg("newAdmin", "address")]),
    _fn("claim", [_arg("token", "address")]),
    _fn("amountAvailableToClaim", [_arg("token", "address")], [_arg("", "uint256")], "view"),
]

# Doppler

AIRLOCK_ABI = OWNABLE_ABI + [
    _fn(
        "create",
        [
            _arg(
                "createData",
                "tuple",
                [
                    _arg("initialSupply", "uint256"),
                    _arg("numTokensToSell", "uint256"),
                    _arg("numeraire", "address"),
                    _arg("tokenFactory", "address"),
                    _arg("tokenFactoryData", "bytes"),
                    _arg("governanceFactory", "address"),
                    _arg("governanceFactoryData", "bytes"),
                    _arg("poolInitializer", "address"),
                    _arg("poolInitializerData", "bytes"),
                    _arg("liquidityMigrator", "address"),
                    _arg("liquidityMigratorData", "bytes"),
                    _arg("integrator", "address"),
                    _arg("salt", "bytes32"),
                ],
            )
        ],
        [
            _arg("asset", "address"),
            _arg("pool", "address"),
            _arg("governance", "address"),
            _arg("timelock", "address"),
            _arg("migrationPool", "address"),
        ],
    ),
    {
        "type": "event",
        "name": "Create",
        "anonymous": False,
        "inputs": [
            {"name": "asset", "type": "address", "indexed": False},
            {"name": "numeraire", "type": "address", "indexed": True},
            {"name": "initializer", "type": "address", "indexed": False},
            {"name": "poolOrHook", "type": "address", "indexed": False},
        ],
    },
]

MULTICURVE_INITIALIZER_ABI = [
    _fn("collectFees", [_arg("poolId", "bytes32")], [_arg("fees0", "uint128"), _arg("fees1", "uint128")]),
]

DERC20_ABI = ERC20_ABI + [
    _fn("release", []),
    _fn("computeAvailableVestedAmount", [_arg("account", "address")], [_arg("", "uint256")], "view"),
]

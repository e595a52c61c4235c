import os
from dataclasses import dataclass, field

UNISWAP_V4_POOL_MANAGER_ADDRESS = "0x1f98400000000000000000000000000000000004"

DEFAULT_SCHEMA_API_URL = "https://api.uniscan.xyz/api"

HOOK_PERMISSION_BITS: dict[str, int] = {
    "beforeSwap": 0,
    "afterSwap": 1,
    "beforeAddLiquidity": 2,
    "afterAddLiquidity": 3,
    "beforeRemoveLiquidity": 4,
    "afterRemoveLiquidity": 5,
    "afterInitialize": 6,
    "beforeInitialize": 7,
    "beforeDonate": 8,
    "afterDonate": 9,
}
""" Bit index inside the hook address for each hook permission """

HOOK_LIFECYCLE_FUNCTION_NAMES = frozenset(
    [
        "beforeInitialize",
        "afterInitialize",
        "beforeAddLiquidity",
        "afterAddLiquidity",
        "beforeRemoveLiquidity",
        "afterRemoveLiquidity",
        "beforeSwap",
        "afterSwap",
        "beforeDonate",
        "afterDonate",
    ]
)


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Configuration shared by every component of a trace analysis.  Built once at startup and passed to the
    resolver, classifier, decoders and permission decoder.  All addresses are stored lowercase.
    """

    json_rpc: str | None = None
    """ JSON RPC url of a node supporting debug_traceTransaction """

    manager_address: str = UNISWAP_V4_POOL_MANAGER_ADDRESS
    """ Address of the PoolManager contract """

    known_hooks: dict[str, str] = field(default_factory=dict)
    """ Mapping of known hook addresses to a human readable label """

    permission_bits: dict[str, int] = field(default_factory=lambda: dict(HOOK_PERMISSION_BITS))
    """ Mapping of permission names to their bit index inside a hook address """

    schema_api_url: str = DEFAULT_SCHEMA_API_URL
    """ Etherscan compatible API used to fetch verified contract ABIs """

    schema_api_key: str | None = None

    schema_lookup_enabled: bool = True
    """ If False, ABIs are never fetched from the remote API """

    schema_timeout: float = 10.0
    trace_timeout: float = 60.0

    max_concurrency: int = 5
    """ Maximum number of transactions analyzed at once by TraceAnalyzer.analyze_many() """

    def __post_init__(self):
        object.__setattr__(self, "manager_address", self.manager_address.lower())
        object.__setattr__(
            self,
            "known_hooks",
            {address.lower(): label for address, label in self.known_hooks.items()},
        )

    def is_known_hook(self, address: str | None) -> bool:
        """Returns True if the address is present in the known hook registry"""
        return address is not None and address.lower() in self.known_hooks

    @classmethod
    def from_env(cls, **overrides) -> "AnalyzerConfig":
        """
        Creates a config from the JSON_RPC, API_KEY and SCHEMA_API_URL environment variables.  Keyword arguments
        take precedence over the environment.
        """
        env_values = {
            "json_rpc": os.environ.get("JSON_RPC"),
            "schema_api_key": os.environ.get("API_KEY"),
            "schema_api_url": os.environ.get("SCHEMA_API_URL", DEFAULT_SCHEMA_API_URL),
        }
        env_values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**env_values)

from nethermind.hooklens.config import AnalyzerConfig
from nethermind.hooklens.utils import is_hex_address


class PermissionDecoder:
    """
    Decodes hook permissions from the low bits of a hook address.  Hook contracts are deployed to addresses whose
    bits flag the lifecycle functions the PoolManager will call, so permissions are read without any RPC calls.
    """

    def __init__(self, config: AnalyzerConfig):
        self.permission_bits = dict(config.permission_bits)

    def decode(self, hook_address: str | None) -> dict[str, bool]:
        """
        Returns a mapping of every permission name to whether its bit is set.  If the address is missing or is not a
        20 byte hex string, every permission is False.
        """
        if not is_hex_address(hook_address):
            return {name: False for name in self.permission_bits}

        address_int = int(hook_address, 16)  # type: ignore[arg-type]
        return {name: bool((address_int >> bit) & 1) for name, bit in self.permission_bits.items()}

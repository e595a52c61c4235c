from .call_decoder import CallDecoder
from .etherscan import EtherscanSchemaSource
from .resolver import InterfaceResolver, SchemaCache
from .schema import InterfaceSchema

__all__ = ["CallDecoder", "EtherscanSchemaSource", "InterfaceResolver", "InterfaceSchema", "SchemaCache"]

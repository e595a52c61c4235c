class HookLensError(Exception):
    """

    Base class for all errors raised by hooklens

    """


class InvalidTransactionHash(HookLensError, ValueError):
    """
    Raised when a transaction hash is not a 0x-prefixed, 64 character hex string.  Hashes are validated before
    any network requests are made.
    """


class TraceFetchError(HookLensError):
    """

    Raised when the call trace for a transaction cannot be fetched from the JSON RPC node.  This error is fatal
    to the analysis of the transaction and is never retried internally.

    """


class SchemaResolutionError(HookLensError):
    """Raised when the remote ABI source returns an error, times out, or returns an unusable ABI"""


class DecodingError(HookLensError):
    """

    Raised when calldata or return data cannot be decoded against a function ABI

    """

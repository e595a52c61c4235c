import logging
import os
from logging import Logger

import click
from rich.console import Console
from rich.logging import RichHandler

from nethermind.hooklens.config import DEFAULT_SCHEMA_API_URL


def cli_logger_config(instrument_logger: Logger, verbose: bool = False) -> Console:
    """Routes library logs through rich, writing to stderr so JSON output stays clean"""
    rich_console = Console(stderr=True)
    instrument_logger.handlers.clear()

    instrument_logger.addHandler(RichHandler(show_path=False, console=rich_console))
    instrument_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return rich_console


def group_options(*options):
    """Decorator to group multiple click options together"""

    def wrapper(function):
        for option in reversed(options):
            function = option(function)
        return function

    return wrapper


# -------------------------------------------------------
#    CLI Secrets, Connections, and Configurations
# -------------------------------------------------------
json_rpc_option = click.option(
    "--json-rpc",
    "-rpc",
    "json_rpc",
    default=os.environ.get("JSON_RPC"),
    help="RPC url supporting debug_traceTransaction.  If not provided, will use the JSON_RPC environment variable",
)
api_key_option = click.option(
    "--api-key",
    "api_key",
    default=os.environ.get("API_KEY"),
    help="Block explorer API key used to fetch verified ABIs.  Defaults to the API_KEY environment variable",
)
schema_api_url_option = click.option(
    "--schema-api-url",
    "schema_api_url",
    default=os.environ.get("SCHEMA_API_URL", DEFAULT_SCHEMA_API_URL),
    show_default=True,
    help="Etherscan compatible API used to fetch verified ABIs",
)
no_schema_lookup_option = click.option(
    "--no-schema-lookup",
    is_flag=True,
    default=False,
    help="If provided, ABIs are never fetched from the block explorer",
)
known_hook_option = click.option(
    "--known-hook",
    "known_hooks",
    multiple=True,
    help="Address of a known hook contract.  Can be input multiple times",
)
verbose_option = click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")

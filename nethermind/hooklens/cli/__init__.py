import asyncio
import json
import logging
from pathlib import Path

import click
from rich.console import Console

from nethermind.hooklens.cli.utils import (
    api_key_option,
    cli_logger_config,
    group_options,
    json_rpc_option,
    known_hook_option,
    no_schema_lookup_option,
    schema_api_url_option,
    verbose_option,
)

# isort: skip_file
# pylint: disable=too-many-arguments,import-outside-toplevel,too-many-locals

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("hooklens").getChild("cli")


@click.group()
def hooklens_cli():
    """Uniswap V4 Hook Trace Debugger"""


@hooklens_cli.command()
@group_options(
    json_rpc_option,
    api_key_option,
    schema_api_url_option,
    no_schema_lookup_option,
    known_hook_option,
    verbose_option,
)
@click.argument("transaction_hashes", nargs=-1, required=True)
@click.option("--json", "json_output", is_flag=True, default=False, help="Print results as JSON")
@click.option(
    "--mermaid-dir",
    "mermaid_dir",
    type=click.Path(file_okay=False, writable=True),
    help="Directory to write a mermaid call diagram for each transaction",
)
def trace(
    json_rpc: str | None,
    api_key: str | None,
    schema_api_url: str,
    no_schema_lookup: bool,
    known_hooks: tuple[str, ...],
    verbose: bool,
    transaction_hashes: tuple[str, ...],
    json_output: bool,
    mermaid_dir: str | None,
):
    """Decode the call trace of one or more transactions and report the hook permissions"""
    from nethermind.hooklens.analyzer import TraceAnalyzer
    from nethermind.hooklens.cli.mermaid import generate_mermaid_diagram
    from nethermind.hooklens.cli.report import print_report
    from nethermind.hooklens.config import AnalyzerConfig
    from nethermind.hooklens.exceptions import InvalidTransactionHash
    from nethermind.hooklens.utils import validate_transaction_hash

    cli_logger_config(root_logger, verbose)
    console = Console()

    try:
        transaction_hashes = tuple(validate_transaction_hash(tx_hash) for tx_hash in transaction_hashes)
    except InvalidTransactionHash as e:
        logger.error(e)
        raise SystemExit(1)

    if not json_rpc:
        logger.error("JSON RPC url not specified... Set with '--json-rpc' option or 'JSON_RPC' environment variable")
        raise SystemExit(1)

    config = AnalyzerConfig(
        json_rpc=json_rpc,
        schema_api_key=api_key,
        schema_api_url=schema_api_url,
        schema_lookup_enabled=not no_schema_lookup,
        known_hooks={address: "cli" for address in known_hooks},
    )
    analyzer = TraceAnalyzer(config)
    results = asyncio.run(analyzer.analyze_many(transaction_hashes))

    failed = False
    json_results = []
    for tx_hash, result in zip(transaction_hashes, results, strict=True):
        if isinstance(result, Exception):
            logger.error(f"Error during transaction debugging of {tx_hash}: {result}")
            failed = True
            continue

        if json_output:
            json_results.append(result.to_dict())
        else:
            print_report(console, result)

        if mermaid_dir:
            diagram_path = Path(mermaid_dir) / f"{tx_hash}.mmd"
            diagram_path.parent.mkdir(parents=True, exist_ok=True)
            diagram_path.write_text(generate_mermaid_diagram(result.trace, result.detected_hook_address))
            logger.info(f"Wrote call diagram to {diagram_path}")

    if json_output:
        single_result = len(transaction_hashes) == 1 and len(json_results) == 1
        click.echo(json.dumps(json_results[0] if single_result else json_results, indent=2))

    if failed:
        raise SystemExit(1)


@hooklens_cli.command()
@click.option("--full-signatures", is_flag=True, default=False)
def interfaces(full_signatures: bool):
    """Lists the functions of the static PoolManager and hook interfaces"""
    from rich.table import Table

    from nethermind.hooklens.abis import (
        HOOK_INTERFACE_ABI,
        HOOK_INTERFACE_ABI_NAME,
        POOL_MANAGER_ABI,
        POOL_MANAGER_ABI_NAME,
    )
    from nethermind.hooklens.decoding.schema import InterfaceSchema

    table = Table(title="Static Interfaces")
    table.add_column("Interface")
    table.add_column("Selector")
    table.add_column("Function")

    for schema in (
        InterfaceSchema(POOL_MANAGER_ABI_NAME, POOL_MANAGER_ABI),
        InterfaceSchema(HOOK_INTERFACE_ABI_NAME, HOOK_INTERFACE_ABI),
    ):
        for selector, decoder in schema.function_decoders.items():
            table.add_row(schema.abi_name, f"0x{selector.hex()}", decoder.id_str(full_signatures))

    Console().print(table)

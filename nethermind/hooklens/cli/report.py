from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nethermind.hooklens.types import AnalysisResult, CallRole, DecodedCall

ROLE_STYLES = {
    CallRole.pool_manager: "magenta",
    CallRole.hook: "cyan",
    CallRole.external: "white",
}


def permissions_table(permissions: dict[str, bool]) -> Table:
    """Rich table listing every hook permission"""
    table = Table(title="Hook Permissions", show_lines=False)
    table.add_column("Permission")
    table.add_column("Status")
    for permission, granted in permissions.items():
        table.add_row(permission, "[green]GRANTED" if granted else "[red]NOT GRANTED")
    return table


def _print_values(console: Console, title: str, values: dict, indent: str):
    console.print(f"{indent}  {title}:")
    for key, value in values.items():
        console.print(f"{indent}    {escape(str(key))}: {escape(str(value))}", soft_wrap=True)


def print_call(console: Console, call: DecodedCall):
    """Prints a single decoded call, indented by its depth"""
    indent = "  " * call.depth
    style = ROLE_STYLES[call.role]
    call_label = escape(f"[{call.call_type.upper()}]")
    console.print(
        f"{indent}[bold]{call_label}[/bold] From: {call.from_address} -> To: {call.to_address}",
        highlight=False,
    )
    function_name = escape(call.function_name)
    if call.is_hook_lifecycle_event:
        function_name = f"[bold green]{function_name}[/bold green]"
    console.print(f"{indent}  Function: {function_name} (Call Type: [{style}]{call.role.value}[/{style}])")
    if call.value != "0":
        console.print(f"{indent}  Value: {call.value} ETH")
    console.print(f"{indent}  Gas Used: {call.gas_used}")
    if call.params:
        _print_values(console, "Parameters", call.params, indent)
    if call.returns:
        _print_values(console, "Returns", call.returns, indent)
    console.print(f"{indent}  {'-' * 20}", highlight=False)


def print_report(console: Console, result: AnalysisResult):
    """Prints the full analysis report for a transaction"""
    console.rule(f"Uniswap V4 Hook Report for Transaction: {result.transaction_hash}")
    console.print(f"Success: {result.success}")

    if result.detected_hook_address:
        console.print(f"\nDetected Hook Address: [cyan]{result.detected_hook_address}")
        console.print(permissions_table(result.hook_permissions))
    else:
        console.print("\nNo specific Hook Address detected in this trace.")

    console.rule("Transaction Call Trace")
    if result.trace:
        for call in result.trace:
            print_call(console, call)
    else:
        console.print("No detailed trace available.")

    console.rule("End")

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console()
error_console = Console(stderr=True)


def display_command(command: str, console: Console = console) -> None:
    """Shows a candidate command. Printed as plain text so brackets survive."""
    console.print(Text(command, style="bold cyan"))


def display_notice(message: str, console: Console = console) -> None:
    console.print(Text(message, style="yellow"))


def display_success(message: str, console: Console = console) -> None:
    console.print(Text(message, style="green"))


def display_error(message: str, console: Console = error_console) -> None:
    console.print(Text(message, style="red"))


def display_output(stdout: str, stderr: str, console: Console = console) -> None:
    """Writes a command's output through unchanged, stderr to stderr."""
    console.print(Text("Command output:", style="bold green"))
    if stdout:
        console.out(stdout, end="", highlight=False)
    if stderr:
        error_console.out(stderr, end="", highlight=False)


def display_config(description: str, max_tokens: int, console: Console = console) -> None:
    """Displays the active configuration."""
    body = Text(description)
    body.append(f"\nMax Tokens: {max_tokens}", style="cyan")
    console.print(Panel(body, title="[bold cyan]Current Configuration[/bold cyan]", border_style="cyan"))


def display_usage(console: Console = console) -> None:
    """Lists the options when the tool is run without a prompt."""
    console.print("[yellow]Please provide a prompt or use one of the following options:[/yellow]")

    table = Table.grid(padding=(0, 2))
    table.add_column(style="cyan")
    table.add_column(style="white")
    table.add_row("--config", "Set up configuration")
    table.add_row("--show-config", "Display current configuration")
    table.add_row("--custom-model", "Set custom model name")
    table.add_row("--custom-endpoint", "Set custom endpoint URL")
    table.add_row("--custom-system-prompt", "Set custom system prompt")
    table.add_row("--custom-api-key", "Set custom API key")
    table.add_row("--disable-cache", "Always query the model, bypassing the cache")
    console.print(table)

    console.print("\n[bold]Example Usage:[/bold]")
    console.print('  llm-term "list all files larger than 100MB"')
    console.print('  llm-term --disable-cache "show my public IP address"')

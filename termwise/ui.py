from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from .upgrade import UpgradeOutcome, UpgradeStatus

console = Console()
err_console = Console(stderr=True)


def is_affirmative(answer: str) -> bool:
    """Empty input means yes; otherwise only a leading 'y' or 'Y' does."""
    return answer[:1].lower() in ("", "y")


def ask_yes_no(question: str) -> bool:
    """Ask a [Y/n] question on stdin. End of input counts as an empty answer."""
    try:
        answer = console.input(f"[bold yellow]{question} [Y/n]:[/] ")
    except EOFError:
        answer = ""
    return is_affirmative(answer)


def confirm_upgrade(current: str, latest: str) -> bool:
    """Ask the user whether to upgrade from ``current`` to ``latest``."""
    return ask_yes_no(f"Upgrade termwise from {current} to {latest}?")


def display_command(command: str) -> None:
    """Display a generated command."""
    console.print(Panel(Syntax(command, "bash", word_wrap=True), title="Command", border_style="green"))


def display_error(message: str) -> None:
    err_console.print(f"[bold red]Error: {message}[/bold red]")


def display_upgrade_outcome(outcome: UpgradeOutcome) -> None:
    """Display the result of an upgrade attempt."""
    if outcome.status is UpgradeStatus.SKIPPED:
        console.print("[yellow]This is a development build; upgrades are disabled.[/yellow]")
    elif outcome.status is UpgradeStatus.ALREADY_LATEST:
        console.print(f"[green]termwise {outcome.to_version} is already the latest version.[/green]")
    elif outcome.status is UpgradeStatus.DECLINED:
        console.print("[yellow]Upgrade cancelled.[/yellow]")
    else:
        console.print(
            f"[bold green]✅ Upgraded termwise from {outcome.from_version} to {outcome.to_version}.[/bold green]"
        )


def display_home_page(console: Console):
    """Displays the home page shown when termwise runs without arguments."""
    console.print(Panel(
        Text("termwise - natural language to shell commands", justify="center"),
        title="✨ Welcome ✨",
        border_style="blue"
    ))

    table = Table.grid(padding=(1, 2))
    table.add_column(style="cyan", justify="right")
    table.add_column(style="white")
    table.add_column(style="green")

    table.add_row("QUERY...", "[dim]→[/dim]", "Suggests a shell command for a plain-language request.")
    table.add_row("--execute", "[dim]→[/dim]", "Runs the suggested command after asking for confirmation.")
    table.add_row("upgrade", "[dim]→[/dim]", "Replaces this executable with the latest release.")
    table.add_row("--version", "[dim]→[/dim]", "Prints the version of this build.")

    console.print("\n[bold]Usage:[/bold]")
    console.print(table)

    console.print("\n[bold]Example Usage:[/bold]")
    console.print("  termwise find all files larger than 100MB in my home directory")
    console.print("  termwise --execute show the ten largest directories here")
    console.print("  termwise upgrade")

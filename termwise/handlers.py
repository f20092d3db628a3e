from .api import GeminiClient
from .config import BuildInfo, Config, executable_path
from .errors import TermwiseError
from .executor import CommandExecutor
from .logger import CommandLogger
from .release import BinaryFetcher, VersionResolver, latest_release_url
from .ui import (
    ask_yes_no,
    confirm_upgrade,
    console,
    display_command,
    display_error,
    display_upgrade_outcome,
)
from .upgrade import UpgradeOrchestrator


def build_upgrade_orchestrator(build: BuildInfo) -> UpgradeOrchestrator:
    """Wires the release endpoints and the running executable into an orchestrator."""
    return UpgradeOrchestrator(
        build=build,
        resolver=VersionResolver(latest_release_url(build.release_repo)),
        fetcher=BinaryFetcher(build.release_repo, build.asset_name),
        target=executable_path(),
        confirm=confirm_upgrade,
    )


def handle_query(config: Config, query: str, execute: bool = False) -> int:
    """Handler for a natural language query."""
    try:
        client = GeminiClient(api_key=config.require_api_key(), model=config.model)
        with console.status("[yellow]Generating command...[/yellow]"):
            command = client.generate_shell_command(query)
    except TermwiseError as e:
        display_error(str(e))
        return 1

    display_command(command)
    if not execute or not ask_yes_no("Run this command?"):
        return 0

    return_code = CommandExecutor().execute_command(command)
    CommandLogger(config.log_dir).log_command_execution(query, command, return_code)
    return return_code


def handle_upgrade(build: BuildInfo) -> int:
    """Handler for the 'upgrade' command."""
    orchestrator = build_upgrade_orchestrator(build)
    if not orchestrator.build.is_dev:
        console.print(f"🔎 Checking for a newer release of termwise {orchestrator.build.version}...")
    try:
        outcome = orchestrator.run()
    except PermissionError as e:
        display_error(f"{e}. Upgrading may require elevated privileges, e.g. 'sudo termwise upgrade'.")
        return 1
    except (TermwiseError, OSError) as e:
        display_error(str(e))
        return 1

    display_upgrade_outcome(outcome)
    return 0

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from rich.console import Console

from .config import BuildInfo
from .release import BinaryFetcher, VersionResolver, discard_file
from .replacer import replace_executable

logger = logging.getLogger(__name__)


class UpgradeStatus(enum.Enum):
    ALREADY_LATEST = "already_latest"
    SKIPPED = "skipped"
    DECLINED = "declined"
    UPGRADED = "upgraded"


class UpgradeState(enum.Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    COMPARING = "comparing"
    CONFIRMING = "confirming"
    DECLINED = "declined"
    FETCHING = "fetching"
    REPLACING = "replacing"
    DONE = "done"


@dataclass(frozen=True)
class UpgradeOutcome:
    """Result of one upgrade attempt."""

    status: UpgradeStatus
    from_version: Optional[str] = None
    to_version: Optional[str] = None


class UpgradeOrchestrator:
    """
    Runs one upgrade attempt from version lookup to binary replacement.

    Args:
        build: Information about the running build.
        resolver: Looks up the latest release tag.
        fetcher: Downloads the binary for a release tag.
        target: Path of the installed executable to replace.
        confirm: Called with (current, latest); returns True to proceed.
        replace: Installs a staging file over the target.
    """

    def __init__(
        self,
        build: BuildInfo,
        resolver: VersionResolver,
        fetcher: BinaryFetcher,
        target: str,
        confirm: Callable[[str, str], bool],
        replace: Callable[[str, str], None] = replace_executable,
    ):
        self.build = build
        self.resolver = resolver
        self.fetcher = fetcher
        self.target = target
        self.confirm = confirm
        self.replace = replace
        self.state = UpgradeState.IDLE

    def _enter(self, state: UpgradeState):
        logger.debug(f"Upgrade state {self.state.value} -> {state.value}")
        self.state = state

    def run(self) -> UpgradeOutcome:
        """
        Upgrade the installed executable if a different release is published.

        Errors from the resolver, fetcher and replacer propagate unchanged.
        """
        self.state = UpgradeState.IDLE
        if self.build.is_dev:
            logger.info("Development build, skipping upgrade")
            self._enter(UpgradeState.DONE)
            return UpgradeOutcome(UpgradeStatus.SKIPPED)

        current = self.build.version
        self._enter(UpgradeState.RESOLVING)
        latest = self.resolver.resolve()

        self._enter(UpgradeState.COMPARING)
        if latest == current:
            self._enter(UpgradeState.DONE)
            return UpgradeOutcome(UpgradeStatus.ALREADY_LATEST, current, latest)

        self._enter(UpgradeState.CONFIRMING)
        if not self.confirm(current, latest):
            self._enter(UpgradeState.DECLINED)
            return UpgradeOutcome(UpgradeStatus.DECLINED, current, latest)

        self._enter(UpgradeState.FETCHING)
        staging = self.fetcher.fetch(latest)
        try:
            self._enter(UpgradeState.REPLACING)
            self.replace(staging, self.target)
        finally:
            # A successful rename consumes the staging file; anything else is left over.
            discard_file(staging)

        self._enter(UpgradeState.DONE)
        logger.info(f"Upgraded {self.target} from {current} to {latest}")
        return UpgradeOutcome(UpgradeStatus.UPGRADED, current, latest)


class StartupAdvisory:
    """Tells the user, without ever failing, that a newer release exists."""

    def __init__(self, resolver: VersionResolver, console: Optional[Console] = None):
        self.resolver = resolver
        self.console = console or Console(stderr=True)

    def maybe_warn(self, build: BuildInfo) -> bool:
        """Returns True if an advisory was written."""
        if build.is_dev:
            return False
        try:
            latest = self.resolver.resolve()
        except Exception as e:
            logger.debug(f"Skipping update advisory: {e}")
            return False
        if latest == build.version:
            return False
        self.console.print(
            f"[yellow]A new version of termwise is available: {latest} "
            f"(you have {build.version}). Run 'termwise upgrade' to update.[/yellow]"
        )
        return True

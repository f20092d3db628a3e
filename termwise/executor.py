import logging
import os
import platform
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)


class CommandExecutor:
    """Runs generated commands through the user's shell."""

    def __init__(self, shell: Optional[str] = None):
        if shell is None and platform.system() != "Windows":
            shell = os.environ.get("SHELL") or "/bin/sh"
        self.shell = shell

    def execute_command(self, command: str) -> int:
        """
        Execute a single shell command with the terminal attached.

        Args:
            command: The shell command to execute

        Returns:
            The exit status of the command; 127 if the shell could not start.
        """
        logger.info(f"Executing command: {command}")

        try:
            completed = subprocess.run(command, shell=True, executable=self.shell)
        except OSError as e:
            logger.error(f"Error executing command '{command}': {e}")
            return 127

        if completed.returncode == 0:
            logger.info(f"Command executed successfully: {command}")
        else:
            logger.error(f"Command failed with return code {completed.returncode}: {command}")
        return completed.returncode

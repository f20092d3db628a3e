import json
import logging
import os
import time
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_dir: Optional[str] = None):
    """
    Set up logging for the application.

    Without a log_dir only the stderr handler is installed.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO if verbose else logging.WARNING)

    # Console handler (with Rich)
    console = Console(stderr=True)
    rich_handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=False,
        rich_tracebacks=True
    )
    root_logger.addHandler(rich_handler)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if log_dir is None:
        return

    # File handler (Rotating)
    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "termwise.log"),
            maxBytes=10*1024*1024, backupCount=5  # 10 MB per file, 5 backups
        )
    except OSError as e:
        logger.warning(f"File logging disabled, could not open {log_dir}: {e}")
        return

    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root_logger.addHandler(file_handler)
    logger.info(f"Logger initialized. Logs will be stored in {log_dir}")


class CommandLogger:
    """Keeps a JSON record of every command termwise executed."""

    def __init__(self, log_dir: str):
        self.log_dir = log_dir

    def log_command_execution(self, query: str, command: str, return_code: int) -> str:
        """
        Log command execution details to a JSON file.

        Args:
            query: Original natural language query
            command: The generated command that was run
            return_code: Exit status of the command

        Returns:
            Path to the log file, or "" if it could not be written
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(self.log_dir, f"command_{timestamp}.json")

        log_data = {
            "timestamp": int(time.time()),
            "datetime": datetime.now().isoformat(),
            "query": query,
            "command": command,
            "return_code": return_code,
        }

        try:
            os.makedirs(self.log_dir, exist_ok=True)
            with open(log_file, 'w') as f:
                json.dump(log_data, f, indent=2)
            logger.info(f"Command execution logged to {log_file}")
            return log_file
        except OSError as e:
            logger.warning(f"Failed to log command execution: {e}")
            return ""

import logging
import sys

from .cli import run_cli

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130  # 128 + SIGINT


def main():
    """Console script entry point; exits with the status of the command."""
    try:
        sys.exit(run_cli())
    except KeyboardInterrupt:
        logger.info("termwise interrupted")
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        logger.exception("termwise failed with an unexpected error")
        print(f"termwise: unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

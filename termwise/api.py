import logging
import os
import platform

import google.generativeai as genai

from .config import DEFAULT_MODEL
from .errors import QueryError
from .parser import extract_command

logger = logging.getLogger(__name__)


class GeminiClient:
    """A client for turning requests into shell commands with the Gemini API."""

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL):
        """
        Initializes the GeminiClient.

        Args:
            api_key: The Gemini API key.
            model: The model to use for generation.
        """
        self.model_name = model
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(self.model_name)
        logger.info(f"Initialized Gemini client with model: {self.model_name}")

    def _construct_shell_command_prompt(self, query: str) -> str:
        """Constructs the prompt for generating a shell command."""
        shell = os.path.basename(os.environ.get("SHELL", "sh"))
        return f"""
You are an expert terminal assistant. Convert the request below into a single shell command.

**Constraints:**
- The command runs on {platform.system()} in a {shell} shell.
- Reply with the command inside one fenced code block and nothing else.
- Prefer standard utilities like `grep`, `awk`, `sed`, `find` and `ps`.

**Request:**
"{query}"
"""

    def generate_shell_command(self, query: str) -> str:
        """
        Generates a shell command from a natural language query.

        Raises:
            QueryError: the API call failed or the reply was empty.
        """
        prompt = self._construct_shell_command_prompt(query)
        try:
            response = self.model.generate_content(prompt)
            text = response.text
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}")
            raise QueryError(f"Gemini API request failed: {e}") from e

        command = extract_command(text or "")
        if not command:
            raise QueryError("The model returned an empty response.")
        return command

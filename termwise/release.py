import logging
import os
import tempfile
from typing import Any, Dict

import requests

from .errors import MetadataParseError, NetworkError

logger = logging.getLogger(__name__)

# Every release request is a single attempt bounded by this many seconds.
HTTP_TIMEOUT = 30
DOWNLOAD_CHUNK_SIZE = 64 * 1024
EXECUTABLE_MODE = 0o755

GITHUB_API_BASE = "https://api.github.com"
GITHUB_DOWNLOAD_BASE = "https://github.com"


def latest_release_url(repo: str) -> str:
    return f"{GITHUB_API_BASE}/repos/{repo}/releases/latest"


def release_asset_url(repo: str, version: str, asset_name: str) -> str:
    return f"{GITHUB_DOWNLOAD_BASE}/{repo}/releases/download/{version}/{asset_name}"


class VersionResolver:
    """Looks up the tag of the latest published release."""

    def __init__(self, metadata_url: str, timeout: float = HTTP_TIMEOUT):
        self.metadata_url = metadata_url
        self.timeout = timeout

    def resolve(self) -> str:
        """
        Fetch the latest release tag.

        Returns:
            The release tag, e.g. "v1.3.0".

        Raises:
            NetworkError: the request failed or returned a non-success status.
            MetadataParseError: the body is not JSON or has no "tag_name".
        """
        logger.info(f"Checking latest release at {self.metadata_url}")
        try:
            response = requests.get(
                self.metadata_url,
                headers={"Accept": "application/vnd.github+json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Could not fetch release metadata: {e}") from e

        try:
            payload: Dict[str, Any] = response.json()
        except ValueError as e:
            raise MetadataParseError(f"Release metadata is not valid JSON: {e}") from e

        tag = payload.get("tag_name") if isinstance(payload, dict) else None
        if not isinstance(tag, str) or not tag:
            raise MetadataParseError("Release metadata has no 'tag_name' field.")
        return tag


class BinaryFetcher:
    """Downloads a release binary into a private staging file."""

    def __init__(self, repo: str, asset_name: str, timeout: float = HTTP_TIMEOUT):
        self.repo = repo
        self.asset_name = asset_name
        self.timeout = timeout

    def artifact_url(self, version: str) -> str:
        return release_asset_url(self.repo, version, self.asset_name)

    def fetch(self, version: str) -> str:
        """
        Download the binary for ``version``.

        Returns:
            Path of the staging file. The caller owns it from here on.

        Raises:
            NetworkError: the download failed or returned a non-success status.
            OSError: the staging file could not be created or written.
        """
        url = self.artifact_url(version)
        fd, staging = tempfile.mkstemp(prefix="termwise-", suffix=".download")
        logger.info(f"Downloading {url} to {staging}")
        try:
            with os.fdopen(fd, "wb") as out:
                self._download(url, out)
            os.chmod(staging, EXECUTABLE_MODE)
        except BaseException:
            discard_file(staging)
            raise
        return staging

    def _download(self, url: str, out) -> None:
        try:
            response = requests.get(url, stream=True, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"Could not download {url}: {e}") from e
        try:
            response.raise_for_status()
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                if chunk:
                    out.write(chunk)
        except requests.RequestException as e:
            raise NetworkError(f"Could not download {url}: {e}") from e
        finally:
            response.close()


def discard_file(path: str) -> None:
    """Remove ``path`` if it exists, logging instead of raising on failure."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")

import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

import toml

from termwise import build
from termwise.config import (
    API_KEY_PLACEHOLDER,
    DEFAULT_MODEL,
    DEFAULT_RELEASE_REPO,
    BuildInfo,
    Config,
    default_config_dir,
    release_asset_name,
)
from termwise.errors import ConfigError


class TestConfig(unittest.TestCase):
    """Test cases for the Config class."""

    def setUp(self):
        self.config_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.config_dir, ignore_errors=True)

    def _env(self, **extra):
        env = {"TERMWISE_CONFIG_DIR": self.config_dir}
        env.update(extra)
        return env

    def test_default_values(self):
        """Test that default values are set correctly."""
        with patch.dict(os.environ, self._env(GEMINI_API_KEY="test_key"), clear=True):
            config = Config()

            self.assertEqual(config.api_key, "test_key")
            self.assertEqual(config.model, DEFAULT_MODEL)
            self.assertEqual(config.release_repo, DEFAULT_RELEASE_REPO)
            self.assertEqual(config.log_dir, os.path.join(self.config_dir, "logs"))
            self.assertFalse(config.verbose)

    def test_creates_default_config_file(self):
        """Test that a missing config file is created with placeholder values."""
        with patch.dict(os.environ, self._env(), clear=True):
            config = Config()

            self.assertTrue(os.path.exists(config.config_file))
            with open(config.config_file) as f:
                data = toml.load(f)
            self.assertEqual(data["api"]["GEMINI_API_KEY"], API_KEY_PLACEHOLDER)

    def test_custom_values(self):
        """Test that custom values from environment variables are set correctly."""
        env = self._env(
            GEMINI_API_KEY="custom_key",
            GEMINI_MODEL="custom-model",
            TERMWISE_LOG_DIR="/custom/log/dir",
            TERMWISE_VERBOSE="true",
            TERMWISE_RELEASE_REPO="someone/fork",
        )
        with patch.dict(os.environ, env, clear=True):
            config = Config()

            self.assertEqual(config.api_key, "custom_key")
            self.assertEqual(config.model, "custom-model")
            self.assertEqual(config.log_dir, "/custom/log/dir")
            self.assertTrue(config.verbose)
            self.assertEqual(config.release_repo, "someone/fork")

    def test_values_from_config_file(self):
        """Test that values are read from any section of the config file."""
        with open(os.path.join(self.config_dir, "config.toml"), "w") as f:
            toml.dump({"api": {"GEMINI_API_KEY": "file_key"}, "application": {"TERMWISE_VERBOSE": True}}, f)

        with patch.dict(os.environ, self._env(), clear=True):
            config = Config()

            self.assertEqual(config.api_key, "file_key")
            self.assertTrue(config.verbose)

    def test_environment_overrides_config_file(self):
        with open(os.path.join(self.config_dir, "config.toml"), "w") as f:
            toml.dump({"api": {"GEMINI_MODEL": "file-model"}}, f)

        with patch.dict(os.environ, self._env(GEMINI_MODEL="env-model"), clear=True):
            self.assertEqual(Config().model, "env-model")

    def test_invalid_config_file(self):
        """Test that an unparsable config file is reported as a ConfigError."""
        with open(os.path.join(self.config_dir, "config.toml"), "w") as f:
            f.write("this is [not toml")

        with patch.dict(os.environ, self._env(), clear=True):
            with self.assertRaises(ConfigError):
                Config()

    def test_missing_api_key(self):
        """Test that a placeholder API key is rejected."""
        with patch.dict(os.environ, self._env(), clear=True):
            config = Config()

            with self.assertRaises(ConfigError):
                config.require_api_key()

    def test_require_api_key(self):
        with patch.dict(os.environ, self._env(GEMINI_API_KEY="test_key"), clear=True):
            self.assertEqual(Config().require_api_key(), "test_key")

    def test_missing_home_directory(self):
        """Test that an unknown home directory raises ConfigError instead of crashing."""
        with patch.dict(os.environ, {}, clear=True):
            with patch("termwise.config.os.path.expanduser", return_value="~"):
                with self.assertRaises(ConfigError):
                    default_config_dir()

    def test_str_masks_api_key(self):
        with patch.dict(os.environ, self._env(GEMINI_API_KEY="abcd1234efgh5678"), clear=True):
            text = str(Config())

            self.assertIn("abcd...5678", text)
            self.assertNotIn("abcd1234efgh5678", text)


class TestBuildInfo(unittest.TestCase):
    """Test cases for BuildInfo."""

    def test_development_sentinel(self):
        self.assertTrue(BuildInfo(version=build.DEV_VERSION).is_dev)
        self.assertFalse(BuildInfo(version="v1.2.0").is_dev)

    def test_current_uses_baked_version(self):
        with patch.object(build, "VERSION", "v9.9.9"):
            info = BuildInfo.current(release_repo="someone/fork")

        self.assertEqual(info.version, "v9.9.9")
        self.assertEqual(info.release_repo, "someone/fork")

    def test_from_environment_ignores_config_file(self):
        with patch.dict(os.environ, {"TERMWISE_RELEASE_REPO": "someone/fork"}, clear=True):
            with patch("termwise.config.Config") as mock_config:
                info = BuildInfo.from_environment()

        mock_config.assert_not_called()
        self.assertEqual(info.release_repo, "someone/fork")
        self.assertEqual(info.version, build.VERSION)

    def test_from_environment_default_repo(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(BuildInfo.from_environment().release_repo, DEFAULT_RELEASE_REPO)

    @patch("termwise.config.platform.machine", return_value="x86_64")
    @patch("termwise.config.platform.system", return_value="Linux")
    def test_release_asset_name(self, mock_system, mock_machine):
        self.assertEqual(release_asset_name(), "termwise-linux-amd64")


if __name__ == "__main__":
    unittest.main()

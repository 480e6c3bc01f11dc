"""Configuration management for bidismoke."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from bidismoke.utils.exceptions import ConfigurationError

PAGE_URL = "data:text/html,<h1>SOME PAGE</h1>"
CHROME_LOG_PATH = Path("/tmp/chrome-debug.log")
CHROMEDRIVER_LOG_PATH = Path("/tmp/chromedriver.log")


@dataclass
class SmokeConfig:
    """Smoke scenario configuration.

    The binary paths are handed to the session untouched; None lets Selenium
    Manager locate (or download) a matching Chrome and ChromeDriver.
    """

    chrome_path: Path | None = None
    chromedriver_path: Path | None = None
    bidi_mapper_path: Path | None = None
    page_url: str = PAGE_URL
    chrome_log_path: Path = CHROME_LOG_PATH
    chromedriver_log_path: Path = CHROMEDRIVER_LOG_PATH
    log_flush_delay: float = 2.0  # seconds


class ConfigLoader:
    """Loads configuration from environment variables."""

    @staticmethod
    def load() -> SmokeConfig:
        """Load configuration from environment.

        Raises:
            ConfigurationError: If a configured path does not exist.
        """
        load_dotenv()  # Load .env file if present

        return SmokeConfig(
            chrome_path=ConfigLoader._get_path_env("BIDISMOKE_CHROME_PATH"),
            chromedriver_path=ConfigLoader._get_path_env(
                "BIDISMOKE_CHROMEDRIVER_PATH"
            ),
            bidi_mapper_path=ConfigLoader._get_path_env("BIDISMOKE_MAPPER_PATH"),
        )

    @staticmethod
    def _get_path_env(name: str) -> Path | None:
        """Get a path environment variable that must point at an existing file.

        Args:
            name: The environment variable name.

        Returns:
            The path, or None if the variable is unset or empty.

        Raises:
            ConfigurationError: If the path does not exist.
        """
        value = os.environ.get(name)
        if not value:
            return None
        return validate_path(value, name)


def validate_path(value: str | Path, name: str) -> Path:
    """Check that a configured binary path exists.

    Args:
        value: The configured path.
        name: Where the value came from, used in the error message.

    Raises:
        ConfigurationError: If nothing exists at the path.
    """
    path = Path(value).expanduser()
    if not path.exists():
        raise ConfigurationError(f"Invalid value for {name}: '{value}' does not exist")
    return path

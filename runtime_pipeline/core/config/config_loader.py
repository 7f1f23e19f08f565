"""
Configuration Loader
Merges command line options, an optional YAML file, the API key file and
interactive prompts into a validated AppConfig.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from ..duration.formatter import TimeUnit
from ..errors import TimestampParseFailure
from ..timestamps import parse_rfc3339
from .app_config import AppConfig

logger = logging.getLogger(__name__)

# Command line value meaning "ask interactively"
ASK = ""

MAX_KEY_FILE_SIZE = 128

RFC3339_HINT = "RFC3339 format required, i.e. 'yyyy-mm-ddTHH:MM:SSZ'"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigLoader:
    """
    Loads and validates the run configuration.

    Responsibilities:
    - Read the optional YAML configuration file
    - Apply command line overrides on top of it
    - Fall back to the API key file when no key is given
    - Prompt for the channel and for dates requested without a value
    - Return validated AppConfig instance
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
        key_file: Path = Path("config/key.txt"),
        prompt: Callable[[str], str] = input
    ):
        """
        Initialize ConfigLoader.

        Args:
            config_path: YAML configuration file, or None to skip it
            overrides: Command line values; None entries are ignored
            key_file: File holding the API key, used when no key is configured
            prompt: Function used to ask the user for missing values
        """
        self._config_path = config_path
        self._overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
        self._key_file = key_file
        self._prompt = prompt

    def load(self) -> AppConfig:
        """
        Load and validate configuration.

        Returns:
            AppConfig: Validated configuration object

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If the config file or the key file doesn't exist
        """
        config_data = self._load_yaml()
        config_data.update(self._overrides)

        api_key = self._validate_api_key(config_data)
        channel = self._validate_channel(config_data)
        start_date = self._validate_date(config_data, "start_date", "Filter to dates starting from:")
        end_date = self._validate_date(config_data, "end_date", "Filter to dates ending at:")

        if start_date is not None and end_date is not None and start_date > end_date:
            logger.warning(f"Start date {start_date} is after end date {end_date}: no video can match")

        return AppConfig(
            api_key=api_key,
            channel=channel,
            start_date=start_date,
            end_date=end_date,
            output_path=self._validate_output(config_data),
            largest_unit=self._validate_largest_unit(config_data),
            show_progress=self._validate_bool(config_data, "show_progress", True),
            log_file=self._validate_optional_str(config_data, "log_file")
        )

    def _load_yaml(self) -> Dict[str, Any]:
        """Load YAML file and return parsed data (empty when no file is configured)."""
        if self._config_path is None:
            return {}

        if not self._config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self._config_path}"
            )

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax: {e}")

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigValidationError(
                "Configuration must be a YAML mapping/dictionary"
            )

        return data

    def _validate_api_key(self, config: Dict[str, Any]) -> str:
        """Validate api_key field, falling back to the key file."""
        if "api_key" not in config:
            logger.info(f"No API key supplied, trying '{self._key_file}' file...")
            return self._load_key_file()

        api_key = config["api_key"]

        if not isinstance(api_key, str):
            raise ConfigValidationError(
                f"Field 'api_key' must be a string, got {type(api_key).__name__}"
            )

        if not api_key.strip():
            raise ConfigValidationError("Field 'api_key' cannot be empty")

        return api_key.strip()

    def _load_key_file(self) -> str:
        """Read the key: first token of the first line of a small regular file."""
        if not self._key_file.exists():
            raise FileNotFoundError(f"API key file not found: {self._key_file}")

        if not self._key_file.is_file():
            raise ConfigValidationError(f"Key file is not a regular file: {self._key_file}")

        size = self._key_file.stat().st_size
        if size == 0:
            raise ConfigValidationError(f"Key file is empty: {self._key_file}")
        if size >= MAX_KEY_FILE_SIZE:
            raise ConfigValidationError(
                f"Key file looks too large to only contain the key [len={size}]"
            )

        with open(self._key_file, 'r', encoding='utf-8') as f:
            tokens = f.readline().split()

        if not tokens:
            raise ConfigValidationError(f"Key file does not start with a key: {self._key_file}")

        logger.info("Successfully loaded API key.")
        return tokens[0]

    def _validate_channel(self, config: Dict[str, Any]) -> str:
        """Validate channel field, prompting when it is absent."""
        if "channel" not in config:
            return self._ask_channel()

        channel = config["channel"]

        if not isinstance(channel, str):
            raise ConfigValidationError(
                f"Field 'channel' must be a string, got {type(channel).__name__}"
            )

        channel = channel.strip().strip("@")
        if not channel:
            raise ConfigValidationError("Field 'channel' cannot be empty")

        return channel

    def _ask_channel(self) -> str:
        while True:
            name = self._prompt("Channel name:\n").strip()
            if not name:
                logger.warning("Empty name supplied!")
            elif not name.isascii() or any(c.isspace() for c in name):
                logger.warning("Invalid character supplied!")
            else:
                return name.strip("@")

    def _validate_date(self, config: Dict[str, Any], field: str, question: str) -> Optional[datetime]:
        """Validate an optional RFC3339 bound; ASK triggers an interactive prompt."""
        value = config.get(field)

        if value is None:
            return None

        # PyYAML already turns unquoted timestamps into datetimes
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)

        if not isinstance(value, str):
            raise ConfigValidationError(
                f"Field '{field}' must be an RFC3339 timestamp, got {type(value).__name__}"
            )

        if value.strip() == ASK:
            return self._ask_date(field, question)

        try:
            return parse_rfc3339(value.strip(), field)
        except TimestampParseFailure as e:
            raise ConfigValidationError(f"{e}. {RFC3339_HINT}")

    def _ask_date(self, field: str, question: str) -> datetime:
        while True:
            answer = self._prompt(question + "\n").strip()
            try:
                return parse_rfc3339(answer, field)
            except TimestampParseFailure as e:
                logger.warning(str(e))
                logger.warning(RFC3339_HINT)

    def _validate_output(self, config: Dict[str, Any]) -> Optional[str]:
        """Validate output field; null or an empty string disables the output file."""
        if "output" not in config:
            return "output.txt"

        output = config["output"]
        if output is None or output is False:
            return None

        if not isinstance(output, str):
            raise ConfigValidationError(
                f"Field 'output' must be a path or null, got {type(output).__name__}"
            )

        return output.strip() or None

    def _validate_largest_unit(self, config: Dict[str, Any]) -> TimeUnit:
        if "largest_unit" not in config:
            return TimeUnit.DAY

        unit = config["largest_unit"]
        if isinstance(unit, TimeUnit):
            return unit
        if not isinstance(unit, str):
            raise ConfigValidationError(
                f"Field 'largest_unit' must be a string, got {type(unit).__name__}"
            )

        try:
            return TimeUnit.from_name(unit)
        except ValueError as e:
            raise ConfigValidationError(f"Field 'largest_unit': {e}")

    def _validate_bool(self, config: Dict[str, Any], field: str, default: bool) -> bool:
        value = config.get(field, default)
        if not isinstance(value, bool):
            raise ConfigValidationError(f"{field} must be boolean, got {type(value).__name__}")
        return value

    def _validate_optional_str(self, config: Dict[str, Any], field: str) -> Optional[str]:
        value = config.get(field)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ConfigValidationError(f"{field} must be string, got {type(value).__name__}")
        return value.strip() or None

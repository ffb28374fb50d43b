"""Central configuration helper for the store export."""

import logging
import os


class HelperConfig:
    """Central configuration helper. Reads all settings from environment variables."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _read_raw(self, key: str, required: bool) -> str | None:
        """Read a raw environment value. Empty strings count as unset.

        Args:
            key (str): Environment variable name (already upper-cased).
            required (bool): Raise if the variable is unset.

        Raises:
            ValueError: If the variable is required but not set.
        """
        raw = os.getenv(key) or None
        if raw is None and required:
            raise ValueError(f"Environment variable '{key}' is not set.")
        return raw.strip() if raw is not None else None

    def get_string_val(self, key: str, default: str | None = None) -> str:
        """Read a string environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (str | None): Fallback value if the variable is not set.

        Returns:
            str: The resolved value.

        Raises:
            ValueError: If the variable is not set and no default is provided.
        """
        raw = self._read_raw(key.upper(), required=default is None)
        return raw if raw is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Read a numeric environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (float | int | None): Fallback value if the variable is not set.

        Returns:
            float | int: The resolved numeric value.

        Raises:
            ValueError: If the variable is not set and no default is provided.
            ValueError: If the value cannot be parsed as a number.
        """
        key = key.upper()
        raw = self._read_raw(key, required=default is None)
        if raw is None:
            return default
        try:
            return int(raw) if "." not in raw else float(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key}' is not a valid number: '{raw}'.")

    def get_duration_val(self, key: str, default_ms: int) -> float:
        """Read a millisecond duration and return it in seconds.

        Args:
            key (str): Environment variable name (case-insensitive).
            default_ms (int): Fallback in milliseconds.

        Returns:
            float: The duration in seconds.

        Raises:
            ValueError: If the value is not a number or is negative.
        """
        millis = self.get_number_val(key, default=default_ms)
        if millis < 0:
            raise ValueError(f"Environment variable '{key.upper()}' must not be negative: '{millis}'.")
        return millis / 1000.0

    def get_bool_val(self, key: str, default: bool | None = None) -> bool:
        """Read a boolean environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (bool | None): Fallback value if the variable is not set.

        Returns:
            bool: The resolved boolean value.

        Raises:
            ValueError: If the variable is not set and no default is provided.
        """
        raw = self._read_raw(key.upper(), required=default is None)
        if raw is None:
            return default
        return raw.lower() in ("true", "1", "yes")

    def get_choice_val(self, key: str, choices: tuple[str, ...], default: str) -> str:
        """Read a string variable restricted to a fixed set of lowercase values.

        Raises:
            ValueError: If the value is not one of ``choices``.
        """
        val = self.get_string_val(key, default=default).lower()
        if val not in choices:
            raise ValueError(f"Environment variable '{key.upper()}' must be one of {', '.join(choices)}. Got: '{val}'")
        return val

    def get_logger(self) -> logging.Logger:
        """Return the application logger.

        Returns:
            logging.Logger: The configured logger instance.
        """
        return self._logger

"""Environment backed settings of the CMIS client.

Keys are upper-cased before the lookup, so "cmis_timeout" and "CMIS_TIMEOUT" name the same variable.
A variable that is empty or only whitespace counts as unset.
"""

import logging
import os

_TRUE_VALUES = ("true", "1", "yes", "on")


class HelperConfig:
    """Reads the settings of the CMIS bindings and hands out the shared logger."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _read(self, key: str, default: object) -> tuple[str, str | None]:
        """
        Looks up one variable.

        Returns:
            tuple[str, str | None]: The upper-cased key and the stripped value, or None if unset.

        Raises:
            ValueError: If the variable is unset and default is None.
        """
        key = key.upper()
        raw = (os.getenv(key) or "").strip() or None
        if raw is None:
            if default is None:
                raise ValueError(f"CMIS setting '{key}' is not set and has no default.")
            self._logger.debug(f"CMIS setting '{key}' is not set, using its default.")
        return key, raw

    def get_string_val(self, key: str, default: str | None = None) -> str:
        """Reads a plain setting such as a binding URL or a user name."""
        _, raw = self._read(key, default)
        return raw if raw is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """
        Reads a numeric setting. Values without a decimal point stay integers.

        Raises:
            ValueError: If the variable is unset without default, or is not a number.
        """
        key, raw = self._read(key, default)
        if raw is None:
            return default
        try:
            return float(raw) if "." in raw else int(raw)
        except ValueError:
            raise ValueError(f"CMIS setting '{key}' must be a number, got '{raw}'.")

    def get_bool_val(self, key: str, default: bool | None = None) -> bool:
        # anything outside _TRUE_VALUES is false
        _, raw = self._read(key, default)
        if raw is None:
            return default
        return raw.lower() in _TRUE_VALUES

    def get_list_val(self, key: str, default: list[str] | None = None) -> list[str]:
        """
        Reads a bracketed, comma separated setting like CMIS_BINDINGS="[browser]".
        Blank entries are dropped, so "[]" and "[ , ]" both give an empty list.

        Raises:
            ValueError: If the variable is unset without default, or is missing its brackets.
        """
        key, raw = self._read(key, default)
        if raw is None:
            return default
        if not (raw.startswith("[") and raw.endswith("]")):
            raise ValueError(f"CMIS setting '{key}' must be written as '[value,value,...]', got '{raw}'.")
        return [item.strip() for item in raw[1:-1].split(",") if item.strip()]

    def get_logger(self) -> logging.Logger:
        return self._logger

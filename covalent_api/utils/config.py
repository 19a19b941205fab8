"""
config.py

This module contains the client configuration loaded from environment variables.
A single Config instance carries the process-wide defaults (access token, quote
currency, output format, base URL) that every request falls back to when the
caller does not pass an explicit value.

All configuration values are loaded from environment variables with sensible defaults.
"""

import os
from typing import Any, Dict


class Config:
    """
    Configuration class that loads all settings from environment variables.

    Attributes:
        API_KEY (str): The Covalent API key.
        BASE_URL (str): The base URL for the Covalent API, without a trailing slash.
        QUOTE_CURRENCY (str): Default quote currency; empty means "use the endpoint fallback".
        OUTPUT_FORMAT (str): Default output format requested from the service.
        REQUEST_TIMEOUT (int): The timeout for HTTP requests in seconds.
        ENVIRONMENT (str): The application environment (e.g., 'development', 'production').
        LOG_LEVEL (str): The logging level for the application.
        LOG_DIR (str): Directory for the log file; empty disables file logging.
        SENTRY_DSN (str): The DSN for Sentry error tracking.
        SENTRY_ENABLED (bool): A flag to enable or disable Sentry.
        SENTRY_ENVIRONMENT (str): The Sentry environment.
        SENTRY_TRACES_SAMPLE_RATE (float): The traces sample rate for Sentry.
    """

    def __init__(self):
        """
        Initializes the configuration from environment variables.
        """
        # Covalent API Configuration
        self.API_KEY = os.getenv("COVALENT_API_KEY", "")
        self.BASE_URL = os.getenv("COVALENT_BASE_URL", "https://api.covalenthq.com/v1").rstrip("/")
        self.QUOTE_CURRENCY = os.getenv("COVALENT_QUOTE_CURRENCY", "")
        self.OUTPUT_FORMAT = os.getenv("COVALENT_OUTPUT_FORMAT", "JSON")

        # Request Configuration
        self.REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))

        # Environment Settings
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_DIR = os.getenv("LOG_DIR", "")

        # Sentry Configuration
        self.SENTRY_DSN = os.getenv("SENTRY_DSN", "")
        self.SENTRY_ENABLED = os.getenv("SENTRY_ENABLED", "false").lower() == "true"
        self.SENTRY_ENVIRONMENT = os.getenv("SENTRY_ENVIRONMENT", self.ENVIRONMENT)
        self.SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "1.0"))

    def validate(self) -> bool:
        """
        Validates that the required configuration values are set.

        Returns:
            bool: True if the configuration is valid.

        Raises:
            ValueError: If a required configuration is missing or invalid.
        """
        # covalent_api.api imports this module at load time
        from covalent_api.api.enums import OutputFormat, QuoteCurrency, accepted_values

        quote_currencies = accepted_values(QuoteCurrency)
        output_formats = accepted_values(OutputFormat)
        errors = []

        if not self.API_KEY.strip():
            errors.append("COVALENT_API_KEY is required but not set")

        if not self.BASE_URL:
            errors.append("COVALENT_BASE_URL must not be empty")

        if self.QUOTE_CURRENCY and self.QUOTE_CURRENCY not in quote_currencies:
            errors.append(
                f"COVALENT_QUOTE_CURRENCY must be one of {', '.join(quote_currencies)}"
            )

        if self.OUTPUT_FORMAT not in output_formats:
            errors.append(f"COVALENT_OUTPUT_FORMAT must be one of {', '.join(output_formats)}")

        if self.REQUEST_TIMEOUT <= 0:
            errors.append("REQUEST_TIMEOUT must be positive")

        if self.SENTRY_ENABLED and not self.SENTRY_DSN:
            errors.append("SENTRY_DSN is required when SENTRY_ENABLED is true")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        return True

    def to_dict(self) -> Dict[str, Any]:
        """
        Converts the configuration to a dictionary.

        Returns:
            Dict[str, Any]: A dictionary containing all configuration values.
        """
        return {
            key: value
            for key, value in self.__dict__.items()
            if not key.startswith("_")
        }


# Global configuration instance
_config = None


def get_config() -> Config:
    """
    Gets the global configuration instance.

    The configuration is loaded only once; later changes to the environment are
    not picked up unless reset_config() is called.

    Returns:
        Config: The global configuration object.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drops the cached global configuration so the next get_config() reloads it."""
    global _config
    _config = None

"""Switchyard Core -- errors, settings, logging and the Result envelope.

Architecture::

    errors.py      Typed error hierarchy (SwitchyardError and friends)
    settings.py    SwitchyardSettings (pydantic-settings, SWITCHYARD_ prefix)
    logging.py     structlog configuration and context helpers
    result.py      Ok / Err envelope used by Dispatcher.try_process
"""

from switchyard.core.errors import (
    CapabilityNotSupportedError,
    ConfigError,
    DuplicateStrategyError,
    ErrorCategory,
    ErrorContext,
    InvalidInputError,
    InvalidStrategyError,
    MissingStrategyError,
    RegistryFrozenError,
    StrategyNotFoundError,
    SwitchyardError,
)
from switchyard.core.result import Err, Ok, Result, try_result
from switchyard.core.settings import SwitchyardSettings, get_settings, reset_settings

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SwitchyardError",
    "InvalidInputError",
    "StrategyNotFoundError",
    "CapabilityNotSupportedError",
    "ConfigError",
    "MissingStrategyError",
    "InvalidStrategyError",
    "DuplicateStrategyError",
    "RegistryFrozenError",
    "Ok",
    "Err",
    "Result",
    "try_result",
    "SwitchyardSettings",
    "get_settings",
    "reset_settings",
]

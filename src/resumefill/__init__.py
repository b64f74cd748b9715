"""ResumeFill package."""

from resumefill.exceptions import (
    AnswerRequestError,
    BackendError,
    DependencyError,
    MalformedResponseError,
    PackageError,
    SettingsError,
    UpstreamCallFailure,
)
from resumefill.logging import configure_logging, get_logger
from resumefill.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("resumefill")

__all__ = [
    "AnswerRequestError",
    "BackendError",
    "DependencyError",
    "MalformedResponseError",
    "PackageError",
    "Settings",
    "SettingsError",
    "UpstreamCallFailure",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
]

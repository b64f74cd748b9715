"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass

from resumefill.typing.enums import FailureCategory

_GUIDANCE = {
    FailureCategory.AUTHENTICATION: (
        "This appears to be an authentication issue. Check that the API key is correct, "
        "has the proper permissions and that the account has sufficient credits."
    ),
    FailureCategory.RATE_LIMIT: "Rate limit exceeded. Wait a moment and try again.",
    FailureCategory.NETWORK: "Network connection issue. Check your internet connection.",
    FailureCategory.OTHER: "Set LOG_LEVEL=DEBUG for more details.",
}


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class BackendError(PackageError):
    """Raised when the answer backend is misconfigured."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class UpstreamCallFailure(PackageError):
    """Raised when one upstream call fails (non-success status or transport error)."""

    message: str
    status_code: int | None = None
    category: FailureCategory = FailureCategory.OTHER

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class MalformedResponseError(PackageError):
    """Raised when an upstream response cannot be parsed into an answer map."""

    message: str
    category: FailureCategory = FailureCategory.OTHER

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class AnswerRequestError(PackageError):
    """Raised when the answer request still fails after every retry."""

    message: str
    attempts: int
    category: FailureCategory = FailureCategory.OTHER

    @property
    def guidance(self) -> str:
        """Return user-facing guidance for the failure category."""
        return _GUIDANCE[self.category]

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Failed to get answers after {self.attempts} attempts: {self.message}"


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when required runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"

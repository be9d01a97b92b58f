from __future__ import annotations

from typing import Optional


class RunTuiError(Exception):
    """Base class for errors raised by run_tui."""


class ApiError(RunTuiError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class AuthenticationError(ApiError):
    TIP = "Tip: run 'gcloud auth login' and check your IAM permissions"

    def __str__(self) -> str:
        return f"authentication failed: {self.message}. {self.TIP}"


class CredentialsError(RunTuiError):
    pass


class ConfigError(RunTuiError):
    pass


class ScaleValidationError(ValueError, RunTuiError):
    pass


class Cancelled(RunTuiError):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "operation cancelled")


class DeadlineExceeded(Cancelled, TimeoutError):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "deadline exceeded")

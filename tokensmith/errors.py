"""Structured error types with recovery suggestions.

Extractors never raise these: they degrade to empty results. The errors
surface from the JSON entry points (converted into ``ParseResult``), from
configuration loading, from the source registry, and from the CLI.
"""

from __future__ import annotations

import json
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import ValidationError


class ErrorCategory(Enum):
    """Categories of errors for organization and handling."""

    PARSE = "parse"  # Malformed JSON, wrong top-level shape
    CONFIGURATION = "configuration"  # Invalid config file or values
    FILE_SYSTEM = "file_system"  # Missing files, permissions
    VALIDATION = "validation"  # Invalid arguments
    EXTRACTION = "extraction"  # No adapter, oversized input


@dataclass
class TokenError(Exception):
    """Base class for token errors that carry a recovery suggestion.

    Attributes:
        category: Which stage of token handling failed.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Context such as the source name or config file.
        exit_code: Exit code to use when this error terminates the CLI.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        The header names the failing stage, e.g. ``Error [parse]: ...``.

        Args:
            use_color: Whether to include ANSI color codes.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error [{self.category.value}]:{reset} {self.message}"]
        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")
        for key, value in (self.details or {}).items():
            lines.append(f"{dim}  {key}: {value}{reset}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON logs and machine-readable output."""
        data: dict[str, Any] = {
            "category": self.category.value,
            "message": self.message,
            "exitCode": self.exit_code,
        }
        if self.suggestion:
            data["suggestion"] = self.suggestion
        if self.details:
            data["details"] = dict(self.details)
        return data

    def __str__(self) -> str:
        return self.format(use_color=False)


class TokenParseError(TokenError):
    """Error when token input text cannot be parsed into an object."""

    def __init__(self, message: str, source_name: str | None = None):
        super().__init__(
            category=ErrorCategory.PARSE,
            message=message,
            suggestion="Check that the input is a JSON object with category keys",
            details={"source": source_name} if source_name else None,
            exit_code=2,
        )


class ConfigurationError(TokenError):
    """Error in configuration file or settings."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = "Check your configuration file syntax and field values"
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"config_file": config_file} if config_file else None,
            exit_code=1,
        )


class SourceNotFoundError(TokenError):
    """Error when a token source file doesn't exist."""

    def __init__(self, path: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Token source not found: {path}",
            suggestion="Verify the path exists and you have read permissions",
            details={"path": path},
            exit_code=1,
        )


class UnsupportedSourceError(TokenError):
    """Error when no extractor accepts a source file."""

    def __init__(self, path: str):
        super().__init__(
            category=ErrorCategory.EXTRACTION,
            message=f"No token extractor found for: {path}",
            suggestion=(
                "Supported sources are tailwind.config.*, .css files "
                "and .json token exports"
            ),
            details={"path": path},
            exit_code=2,
        )


def describe_validation_error(error: ValidationError) -> str:
    """Join pydantic validation problems as ``field: message`` pairs."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in error.errors()
    )


def as_token_error(error: Exception) -> TokenError | None:
    """Map an exception from pydantic, json or the file system onto a TokenError.

    Returns None for exceptions with no token-level meaning.
    """
    if isinstance(error, TokenError):
        return error
    if isinstance(error, ValidationError):
        return ConfigurationError(f"Invalid configuration: {describe_validation_error(error)}")
    if isinstance(error, json.JSONDecodeError):
        return TokenParseError(
            f"Invalid JSON format: {error.msg} (line {error.lineno}, column {error.colno})"
        )
    if isinstance(error, FileNotFoundError) and error.filename:
        return SourceNotFoundError(str(error.filename))
    if isinstance(error, OSError):
        details = {"path": str(error.filename)} if error.filename else None
        return TokenError(
            category=ErrorCategory.FILE_SYSTEM,
            message=error.strerror or str(error),
            suggestion="Check the path and its permissions",
            details=details,
            exit_code=1,
        )
    return None


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Convert any exception to formatted output and exit code.

    Args:
        error: The exception to handle.
        use_color: Whether to use color in output.
        verbose: Whether to append the error's own traceback.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    token_error = as_token_error(error)
    if token_error is not None:
        message = token_error.format(use_color=use_color)
        exit_code = token_error.exit_code
    else:
        red = "\033[91m" if use_color else ""
        reset = "\033[0m" if use_color else ""
        message = f"{red}Error:{reset} {error}"
        exit_code = 1

    if verbose:
        message += "\n\nTraceback:\n" + "".join(traceback.format_exception(error))

    return message, exit_code

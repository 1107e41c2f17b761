"""
Validation type definitions and exceptions for mapconfig.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List


class Severity(Enum):
    """Severity of a validation message."""
    ERROR = "error"
    WARNING = "warning"


class ConfigError(Exception):
    """Raised when a configuration document cannot be split into sections."""
    pass


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]


@dataclass(frozen=True)
class ValidationMessage:
    """A single diagnostic produced while parsing a section."""
    severity: Severity
    message: str

    @classmethod
    def error(cls, message: str) -> "ValidationMessage":
        return cls(Severity.ERROR, message)

    @classmethod
    def warning(cls, message: str) -> "ValidationMessage":
        return cls(Severity.WARNING, message)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        label = "Error" if self.is_error else "Warning"
        return f"{label}: {self.message}"


class ValidationList:
    """Ordered, append-only list of validation messages.

    Each section owns one list; the parser collects them into a
    :data:`ValidationMap` keyed by section identifier.
    """

    def __init__(self) -> None:
        self._messages: List[ValidationMessage] = []

    def append(self, message: ValidationMessage) -> None:
        """Append an already built message."""
        self._messages.append(message)

    def error(self, message: str) -> None:
        """Append an error message."""
        self._messages.append(ValidationMessage.error(message))

    def warning(self, message: str) -> None:
        """Append a warning message."""
        self._messages.append(ValidationMessage.warning(message))

    def __iter__(self) -> Iterator[ValidationMessage]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __getitem__(self, index: int) -> ValidationMessage:
        return self._messages[index]

    def __repr__(self) -> str:
        return f"ValidationList({self._messages!r})"

    @property
    def has_errors(self) -> bool:
        """Check if any message has error severity."""
        return any(message.is_error for message in self._messages)

    @property
    def errors(self) -> List[str]:
        """Texts of all error messages, in order."""
        return [m.message for m in self._messages if m.is_error]

    @property
    def warnings(self) -> List[str]:
        """Texts of all warning messages, in order."""
        return [m.message for m in self._messages if not m.is_error]

    def result(self) -> ValidationResult:
        """Summarize this list as a ValidationResult."""
        errors = self.errors
        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=self.warnings
        )


# Section identifier -> messages of that section, in document order
ValidationMap = Dict[str, ValidationList]


def has_errors(validation: ValidationMap) -> bool:
    """Check if any section of a validation map holds an error."""
    return any(messages.has_errors for messages in validation.values())


def summarize(validation: ValidationMap) -> ValidationResult:
    """Flatten a validation map into one ValidationResult.

    Message texts are prefixed with their section identifier.
    """
    errors: List[str] = []
    warnings: List[str] = []
    for section, messages in validation.items():
        errors.extend(f"[{section}] {text}" for text in messages.errors)
        warnings.extend(f"[{section}] {text}" for text in messages.warnings)
    return ValidationResult(
        is_valid=len(errors) == 0, errors=errors, warnings=warnings
    )

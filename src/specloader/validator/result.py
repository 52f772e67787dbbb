"""Validation diagnostics: :class:`ValidationIssue` and :class:`ValidationResult`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class ValidationIssue:
    """One diagnostic.

    Attributes:
        code: Stable machine-readable identifier, e.g.
            ``"PARAMETER_MISSING_SCHEMA_OR_CONTENT"``.
        message: Human-readable description.
        context: Where the issue was found, e.g. ``"path:/pets,parameter:limit"``.
    """

    code: str
    message: str
    context: str = ""

    def __str__(self) -> str:
        if self.context:
            return f"[{self.code}] {self.message} ({self.context})"
        return f"[{self.code}] {self.message}"


@dataclass
class ValidationResult:
    """Append-only collection of errors and warnings.

    Adding issues never raises and never stops a caller from continuing;
    :attr:`is_valid` only looks at errors.
    """

    _errors: list[ValidationIssue] = field(default_factory=list)
    _warnings: list[ValidationIssue] = field(default_factory=list)

    def add_error(self, code: str, message: str, context: str = "") -> ValidationIssue:
        issue = ValidationIssue(code, message, context)
        self._errors.append(issue)
        return issue

    def add_warning(self, code: str, message: str, context: str = "") -> ValidationIssue:
        issue = ValidationIssue(code, message, context)
        self._warnings.append(issue)
        return issue

    def extend(self, other: "ValidationResult") -> None:
        """Append every error and warning of *other*, keeping their order."""
        self._errors.extend(other.errors)
        self._warnings.extend(other.warnings)

    def clear(self) -> None:
        self._errors.clear()
        self._warnings.clear()

    @property
    def errors(self) -> list[ValidationIssue]:
        return list(self._errors)

    @property
    def warnings(self) -> list[ValidationIssue]:
        return list(self._warnings)

    @property
    def issues(self) -> list[ValidationIssue]:
        """Errors followed by warnings."""
        return self._errors + self._warnings

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def error_count(self) -> int:
        return len(self._errors)

    @property
    def warning_count(self) -> int:
        return len(self._warnings)

    def codes(self) -> list[str]:
        return [issue.code for issue in self.issues]

    def __iter__(self) -> Iterator[ValidationIssue]:
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self._errors) + len(self._warnings)

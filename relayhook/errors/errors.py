"""
Exceptions raised by the relay hook.

Exception hierarchy:
- RelayHookError (base)
  - Unauthorized: caller is not in the authorization registry
  - ConfigurationError: invalid settings
  - StateStoreError: state could not be loaded or persisted
"""

from __future__ import annotations

from typing import Any, Optional


class RelayHookError(Exception):
    """Base exception for all relay hook errors."""

    def __init__(
        self,
        message: str,
        *,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.component = component
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.component:
            parts.append(f"[component={self.component}]")
        if self.details:
            parts.append(f"[details={self.details}]")
        return " ".join(parts)


class Unauthorized(RelayHookError):
    """Raised when a policy mutation is attempted by a non-authorized principal."""

    def __init__(
        self,
        caller: str,
        *,
        operation: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.caller = caller
        self.operation = operation
        details = details or {}
        details["caller"] = caller
        if operation:
            details["operation"] = operation
        super().__init__("Unauthorized", component=component, details=details)


class ConfigurationError(RelayHookError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field = field
        self.value = value
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, component=component, details=details)


class StateStoreError(RelayHookError):
    """Raised when the state store cannot be read or written."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.path = path
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, component=component, details=details)

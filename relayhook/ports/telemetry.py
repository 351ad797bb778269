"""Telemetry Port Interface.

Contract: Log structured events (one event name plus flat fields).
"""
from __future__ import annotations
from typing import Protocol, Any

class Telemetry(Protocol):
    def log(self, event: str, **fields: Any) -> None: ...

"""Ecosystem adapters."""

from reachcheck.application.adapters.javascript import JavaScriptAdapter

__all__ = [
    "JavaScriptAdapter",
]

"""Event backends that delegate to third-party emitters."""

from .native import NativeEventBus

__all__ = ["NativeEventBus"]

"""
Event system for the treasure chest engine.

This package provides the event bus that the engine announces game progress on.
"""

from treasurechest.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]

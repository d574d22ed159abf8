"""
Event system for the parlor engines.
"""

from parlor.events.emitter import EventEmitter, EventPriority, EngineEventType

__all__ = ["EventEmitter", "EventPriority", "EngineEventType"]

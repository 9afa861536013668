"""
Application services and event handling.
"""

from glam_agents.application.event_bus import EventBus, get_event_bus, Events

__all__ = ['EventBus', 'get_event_bus', 'Events']

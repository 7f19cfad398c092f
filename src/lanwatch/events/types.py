"""Event type constants for the lanwatch event bus.

Components publish events using these types, and subscribers filter on
them.
"""

from __future__ import annotations


class EventType:
    """Namespace for event type string constants."""

    # Scan lifecycle
    SCAN_STARTED = "scan.started"
    SCAN_PROGRESS = "scan.progress"
    SCAN_COMPLETE = "scan.complete"
    SCAN_CANCELLED = "scan.cancelled"
    SCAN_FAILED = "scan.failed"

    # Device events
    DEVICE_DISCOVERED = "device.discovered"
    DEVICE_ROGUE = "device.rogue"
    DEVICE_CHANGED = "device.changed"

    # Scheduler events
    SCHEDULE_TRIGGERED = "schedule.triggered"

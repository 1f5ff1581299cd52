"""Scheduled events: lifecycle service, store and execution scheduler.

Public API:
- EventService (herald.events.service): create/update/delete, pending-only mutation
- EventStore (herald.events.store): session-bound queries on the events table
- ExecutionScheduler (herald.events.scheduler): polls for due events and
  marks them executed

Only the plain types are re-exported here; the modules above depend on
herald.db, which itself depends on these types.
"""

from herald.events.types import Event, EventPatch, EventStatus

__all__ = [
    "Event",
    "EventPatch",
    "EventStatus",
]

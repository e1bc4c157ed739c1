"""
Event handlers for domain events.

These handlers process domain events for side effects like audit logging.
"""

import logging

from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.events import event_bus
from webservers.domain.events import (
    WebServerActivated,
    WebServerActivationSkipped,
    WebServerRecoveryPerformed,
)

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Logs every web server configuration change with its event payload.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        payload = event.to_dict()
        level = logging.INFO
        if isinstance(event, WebServerRecoveryPerformed) and not event.complete:
            level = logging.WARNING
        logger.log(
            level,
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": payload["event_id"],
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": payload["occurred_at"],
            },
        )


def register_event_handlers():
    """
    Register all event handlers with the event bus.

    Safe to call more than once.
    """
    audit_handler = AuditLogEventHandler()

    for event_type in (WebServerActivated, WebServerActivationSkipped, WebServerRecoveryPerformed):
        event_bus.subscribe(event_type, audit_handler)

    logger.debug("Event handlers registered successfully")

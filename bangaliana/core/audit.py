"""Append-only trail of admin grants and payment reconciliation."""

from typing import Any

from bangaliana.models.audit_log import AuditLog


async def log_event(
    actor_email: str | None,
    event_type: str,
    entity_type: str,
    entity_id: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> None:
    """actor_email is None for writes made by the service itself (compensation)."""
    await AuditLog(
        actor_email=actor_email,
        event_type=event_type,
        entity_type=entity_type,
        entity_id=entity_id,
        metadata=metadata or {},
    ).insert()

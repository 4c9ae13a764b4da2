"""
Audit Models for Expense Splitter

Every settle-up computation is recorded as a sequence of audit events.
This provides:
1. Traceability of which inputs produced which settlements
2. Debugging information when balances drift
3. Visibility into tolerated problems (unknown member ids)

DESIGN DECISION: Audit events are append-only and live in memory only.
Nothing is persisted.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Validation
    VALIDATION_PASSED = "validation_passed"
    VALIDATION_FAILED = "validation_failed"
    UNKNOWN_MEMBER_REFERENCE = "unknown_member_reference"

    # Computation
    BALANCES_CALCULATED = "balances_calculated"
    SETTLEMENTS_CALCULATED = "settlements_calculated"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every step of a settle-up creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'group', 'expense')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., all events in one settle-up)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.balances_calculated(group_id, 4, 3, correlation_id)
        event = AuditEventBuilder.validation_failed(group_id, issues, correlation_id)
    """

    @staticmethod
    def validation_passed(
        group_id: str,
        warning_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_PASSED,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=f"Expenses validated with {warning_count} warnings",
            details={
                "warning_count": warning_count,
            },
        )

    @staticmethod
    def validation_failed(
        group_id: str,
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=f"Expense validation failed with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def unknown_member_reference(
        expense_id: str,
        member_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UNKNOWN_MEMBER_REFERENCE,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense references unknown member {member_id}",
            details={
                "member_id": member_id,
            },
        )

    @staticmethod
    def balances_calculated(
        group_id: str,
        member_count: int,
        expense_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCES_CALCULATED,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=(
                f"Balances calculated for {member_count} members "
                f"from {expense_count} expenses"
            ),
            details={
                "member_count": member_count,
                "expense_count": expense_count,
            },
        )

    @staticmethod
    def settlements_calculated(
        group_id: str,
        settlement_count: int,
        total_settled: float,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENTS_CALCULATED,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=f"{settlement_count} settlements suggested",
            details={
                "settlement_count": settlement_count,
                "total_settled": total_settled,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

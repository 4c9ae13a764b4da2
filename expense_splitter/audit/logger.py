"""
Audit Logger

DESIGN DECISION: Every settle-up is logged.
This provides:
1. Traceability from expenses to suggested settlements
2. Debugging capability when balances look wrong
3. A record of tolerated input problems

The audit logger:
- Writes structured JSON through structlog
- Keeps the most recent events in memory (nothing is persisted)
- Supports correlation IDs to trace related events
"""

from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_splitter.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


# A settle-up logs three or more events, so this holds a few hundred runs.
DEFAULT_MAX_EVENTS = 1000


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for the caller to inspect)
    """

    def __init__(self, keep_history: bool = True, max_events: int = DEFAULT_MAX_EVENTS):
        """
        Initialize audit logger.

        Args:
            keep_history: Keep logged events in memory.
                    If False, only logs locally.
            max_events: Size of the in-memory history. Once full, the
                    oldest event is dropped for each new one.
        """
        if max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._keep_history = keep_history
        self._events: deque[AuditEvent] = deque(maxlen=max_events)
        self._logger = structlog.get_logger(__name__)

    @property
    def events(self) -> list[AuditEvent]:
        """Events logged so far, oldest first."""
        return list(self._events)

    def events_for(self, correlation_id: UUID) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def clear(self) -> None:
        self._events.clear()

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Log an audit event.

        Always logs locally. Keeps the event in memory if history is on.
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._keep_history:
            self._events.append(event)

        return event

    def log_validation_passed(
        self,
        group_id: str,
        warning_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log successful expense validation."""
        event = AuditEventBuilder.validation_passed(
            group_id=group_id,
            warning_count=warning_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_validation_failed(
        self,
        group_id: str,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log validation failure."""
        event = AuditEventBuilder.validation_failed(
            group_id=group_id,
            issues=issues,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_unknown_member(
        self,
        expense_id: str,
        member_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.unknown_member_reference(
            expense_id=expense_id,
            member_id=member_id,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_balances_calculated(
        self,
        group_id: str,
        member_count: int,
        expense_count: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.balances_calculated(
            group_id=group_id,
            member_count=member_count,
            expense_count=expense_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_settlements_calculated(
        self,
        group_id: str,
        settlement_count: int,
        total_settled: float,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.settlements_calculated(
            group_id=group_id,
            settlement_count=settlement_count,
            total_settled=total_settled,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a settle-up and pass it through
    all subsequent operations.
    """
    return uuid4()

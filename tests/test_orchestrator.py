"""Tests for the settle-up flow and the audit logger."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from expense_splitter import SettlementFlow, create_app_components
from expense_splitter.audit import AuditLogger, create_correlation_id
from expense_splitter.config import SplitterSettings
from expense_splitter.errors import ExpenseValidationError
from expense_splitter.models.audit import AuditEvent, AuditEventType, AuditSeverity
from expense_splitter.models.expense import Currency, Expense, ExpenseGroup, Member
from expense_splitter.sample_data import (
    EXPECTED_BALANCES,
    SAMPLE_GROUP_NAME,
    build_sample_group,
)


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def flow(audit_logger):
    return SettlementFlow(audit_logger=audit_logger, settings=SplitterSettings())


class TestSettlementFlow:
    """Tests for SettlementFlow.summarize."""

    def test_sample_group_summary(self, flow):
        """Test the roommates group end to end."""
        summary = flow.summarize(build_sample_group())

        assert summary.group_name == SAMPLE_GROUP_NAME
        assert summary.currency == Currency.USD
        assert summary.total_expenses == 200.0
        assert {b.member_name: b.balance for b in summary.balances} == EXPECTED_BALANCES
        assert summary.settlement_count == 3
        assert summary.warnings == []
        assert summary.is_settled_up is False

    def test_audit_trail(self, flow, audit_logger):
        """Test every step is audited under one correlation id."""
        correlation_id = create_correlation_id()

        flow.summarize(build_sample_group(), correlation_id=correlation_id)

        events = audit_logger.events_for(correlation_id)
        assert [e.event_type for e in events] == [
            AuditEventType.VALIDATION_PASSED,
            AuditEventType.BALANCES_CALCULATED,
            AuditEventType.SETTLEMENTS_CALCULATED,
        ]
        assert events[-1].details["settlement_count"] == 3
        assert all(e.entity_id == "apartment-4b" for e in events)

    def test_unknown_member_becomes_warning(self, flow, audit_logger):
        """Test unknown ids are tolerated and reported."""
        group = ExpenseGroup(
            name="Trip",
            members=[Member(id="1", name="Alice"), Member(id="2", name="Bob")],
            expenses=[
                Expense(id="e1", amount=30, paid_by="1", split_between=["1", "2", "ghost"]),
            ],
        )

        summary = flow.summarize(group)

        assert [b.balance for b in summary.balances] == [20.0, -10.0]
        assert len(summary.warnings) == 1
        unknown = [
            e for e in audit_logger.events
            if e.event_type == AuditEventType.UNKNOWN_MEMBER_REFERENCE
        ]
        assert len(unknown) == 1
        assert unknown[0].details["member_id"] == "ghost"
        assert unknown[0].entity_id == "e1"

    def test_invalid_group_raises_and_is_audited(self, flow, audit_logger):
        """Test an empty split stops the flow."""
        bad = Expense.model_construct(
            id="bad",
            description="Nothing",
            amount=10.0,
            paid_by="1",
            split_between=[],
            date=datetime.now(timezone.utc),
        )
        group = ExpenseGroup(name="Trip", members=[Member(id="1", name="Alice")], expenses=[bad])

        with pytest.raises(ExpenseValidationError):
            flow.summarize(group)

        assert [e.event_type for e in audit_logger.events] == [AuditEventType.VALIDATION_FAILED]
        assert audit_logger.events[0].details["issues"][0]["issue_type"] == "empty_split"

    def test_empty_group(self, flow):
        """Test a group with nothing to settle."""
        summary = flow.summarize(ExpenseGroup(name="Empty"))

        assert summary.balances == []
        assert summary.settlements == []
        assert summary.total_expenses == 0.0
        assert summary.is_settled_up is True

    def test_settled_up_follows_configured_tolerance(self):
        """Test the summary agrees with the resolver under a wider tolerance."""
        group = ExpenseGroup(
            name="Coffee",
            members=[Member(id="1", name="Alice"), Member(id="2", name="Bob")],
            expenses=[Expense(amount=0.08, paid_by="1", split_between=["1", "2"])],
        )
        flow = SettlementFlow(settings=SplitterSettings(settlement_tolerance=0.05))

        summary = flow.summarize(group)

        assert [b.balance for b in summary.balances] == [0.04, -0.04]
        assert summary.settlements == []
        assert summary.settlement_tolerance == 0.05
        assert summary.is_settled_up is True

    def test_flow_without_audit_logger(self):
        """Test auditing is optional."""
        summary = SettlementFlow(settings=SplitterSettings()).summarize(build_sample_group())
        assert summary.settlement_count == 3

    def test_summary_serializes_with_frontend_keys(self, flow):
        """Test the summary can be sent to the frontend as-is."""
        data = flow.summarize(build_sample_group()).model_dump(by_alias=True, mode="json")

        assert data["groupName"] == SAMPLE_GROUP_NAME
        assert data["balances"][0]["memberName"] == "Alice"
        assert set(data["settlements"][0]) == {"from", "to", "amount"}


class TestCreateAppComponents:
    """Tests for create_app_components."""

    def test_components_are_wired(self):
        """Test the flow shares the returned logger."""
        components = create_app_components(SplitterSettings())

        components["settlement_flow"].summarize(build_sample_group())

        assert len(components["audit_logger"].events) == 3


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_log_keeps_history(self, audit_logger):
        """Test events are kept in order."""
        first = AuditEvent(event_type=AuditEventType.BALANCES_CALCULATED, description="one")
        second = AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description="two",
        )

        audit_logger.log(first)
        audit_logger.log(second)

        assert audit_logger.events == [first, second]

    def test_history_can_be_disabled(self):
        """Test a logger that only writes locally."""
        audit_logger = AuditLogger(keep_history=False)

        audit_logger.log_error("boom", "something broke")

        assert audit_logger.events == []

    def test_events_for_filters_by_correlation(self, audit_logger):
        """Test correlation filtering."""
        mine, other = uuid4(), uuid4()
        audit_logger.log_balances_calculated("g1", 2, 1, mine)
        audit_logger.log_balances_calculated("g2", 2, 1, other)

        assert [e.entity_id for e in audit_logger.events_for(mine)] == ["g1"]

    def test_clear(self, audit_logger):
        """Test clearing the history."""
        audit_logger.log_error("boom", "something broke")
        audit_logger.clear()
        assert audit_logger.events == []

    def test_events_returns_copy(self, audit_logger):
        """Test callers cannot change the history."""
        audit_logger.log_error("boom", "something broke")
        audit_logger.events.clear()
        assert len(audit_logger.events) == 1

    def test_history_is_capped(self):
        """Test the oldest events are dropped once the history is full."""
        audit_logger = AuditLogger(max_events=3)

        for i in range(5):
            audit_logger.log_error(f"e{i}", "something broke")

        assert [e.description for e in audit_logger.events] == [
            "System error: e2",
            "System error: e3",
            "System error: e4",
        ]

    def test_long_lived_logger_stays_bounded(self):
        """Test repeated settle-ups do not grow the history past its cap."""
        audit_logger = AuditLogger(max_events=10)
        flow = SettlementFlow(audit_logger=audit_logger, settings=SplitterSettings())

        for _ in range(20):
            flow.summarize(build_sample_group())

        assert len(audit_logger.events) == 10
        assert audit_logger.events[-1].event_type == AuditEventType.SETTLEMENTS_CALCULATED

    def test_rejects_empty_history_size(self):
        """Test the history size must be positive."""
        with pytest.raises(ValueError):
            AuditLogger(max_events=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""Unit tests for Task domain entity"""

from datetime import date
from decimal import Decimal
from src.domain.task import Task, TaskStatus


class TestTaskAmount:

    def test_recompute_amount_uses_snapshot_rate(self):
        task = Task(
            tenant_id="tenant_abc",
            client_id="client_1",
            description="Design review",
            hours=Decimal("3"),
            work_date=date(2024, 1, 10),
            hourly_rate=Decimal("40"),
        )

        amount = task.recompute_amount()

        assert amount == Decimal("120.000000")
        assert task.amount == amount

    def test_new_task_defaults(self):
        task = Task(
            tenant_id="tenant_abc",
            client_id="client_1",
            description="Design review",
            hours=Decimal("1"),
            work_date=date(2024, 1, 10),
            hourly_rate=Decimal("40"),
        )

        assert task.invoiced is False
        assert task.invoice_id is None
        assert task.status == TaskStatus.PENDING
        assert task.id


class TestTaskStatus:

    def test_status_values(self):
        assert TaskStatus.PENDING.value == "pending"
        assert TaskStatus.IN_PROGRESS.value == "in-progress"
        assert TaskStatus.COMPLETED.value == "completed"

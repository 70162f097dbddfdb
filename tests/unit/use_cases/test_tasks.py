"""Unit tests for task use cases

Tests cover:
- Rate snapshot and amount on create
- Client change re-snapshots the rate
- Invoiced tasks cannot be deleted or moved
- Unbilled listing and recent window
"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

from libs.result import ErrorKind
from src.app.use_cases.tasks import (
    CreateTask,
    UpdateTask,
    DeleteTask,
    GetUnbilledTasksByClient,
    GetRecentTasks,
    CreateTaskCommandDTO,
    UpdateTaskCommandDTO,
)
from src.domain.base import utcnow
from tests.unit.factories import TENANT_ID, make_client, make_task


@pytest.mark.asyncio
class TestCreateTask:

    async def test_snapshots_client_rate(self, mock_uow, mock_task_repo, mock_client_repo):
        """
        Given: A client billing 50/hr
        When: A 2.5 hour task is logged without a rate
        Then: The task carries rate 50 and amount 125, un-invoiced
        """
        mock_client_repo.get_by_id = AsyncMock(return_value=make_client())
        mock_task_repo.create = AsyncMock(side_effect=lambda task: task)

        command = CreateTaskCommandDTO(
            tenant_id=TENANT_ID,
            client_id="client_1",
            description="Landing page",
            hours=Decimal("2.5"),
            work_date=date(2024, 1, 15),
        )
        result = await CreateTask(mock_uow, mock_task_repo, mock_client_repo).execute(command)

        assert result.is_ok()
        assert result.value.hourly_rate == Decimal("50.000000")
        assert result.value.amount == Decimal("125.000000")
        assert result.value.invoiced is False
        assert result.value.status == "pending"
        mock_uow.commit.assert_called_once()

    async def test_rate_override_wins(self, mock_uow, mock_task_repo, mock_client_repo):
        mock_client_repo.get_by_id = AsyncMock(return_value=make_client())
        mock_task_repo.create = AsyncMock(side_effect=lambda task: task)

        command = CreateTaskCommandDTO(
            tenant_id=TENANT_ID,
            client_id="client_1",
            description="Rush job",
            hours=Decimal("1"),
            work_date=date(2024, 1, 15),
            hourly_rate=Decimal("90"),
        )
        result = await CreateTask(mock_uow, mock_task_repo, mock_client_repo).execute(command)

        assert result.value.hourly_rate == Decimal("90")
        assert result.value.amount == Decimal("90.000000")

    async def test_unknown_client(self, mock_uow, mock_task_repo, mock_client_repo):
        mock_client_repo.get_by_id = AsyncMock(return_value=None)
        mock_task_repo.create = AsyncMock()

        command = CreateTaskCommandDTO(
            tenant_id=TENANT_ID,
            client_id="client_of_other_tenant",
            description="x",
            hours=Decimal("1"),
            work_date=date(2024, 1, 15),
        )
        result = await CreateTask(mock_uow, mock_task_repo, mock_client_repo).execute(command)

        assert result.error.kind == ErrorKind.NOT_FOUND
        mock_task_repo.create.assert_not_called()

    async def test_negative_hours(self, mock_uow, mock_task_repo, mock_client_repo):
        command = CreateTaskCommandDTO(
            tenant_id=TENANT_ID,
            client_id="client_1",
            description="x",
            hours=Decimal("-1"),
            work_date=date(2024, 1, 15),
        )
        result = await CreateTask(mock_uow, mock_task_repo, mock_client_repo).execute(command)

        assert result.error.code == "INVALID_HOURS"


@pytest.mark.asyncio
class TestUpdateTask:

    async def test_hours_change_recomputes_amount(self, mock_uow, mock_task_repo, mock_client_repo):
        mock_task_repo.get_by_id = AsyncMock(return_value=make_task())
        mock_task_repo.update = AsyncMock(side_effect=lambda task: task)

        command = UpdateTaskCommandDTO(tenant_id=TENANT_ID, task_id="task_1", hours=Decimal("3"))
        result = await UpdateTask(mock_uow, mock_task_repo, mock_client_repo).execute(command)

        assert result.value.amount == Decimal("150.000000")

    async def test_client_change_resnapshots_rate(self, mock_uow, mock_task_repo, mock_client_repo):
        """
        Given: A task at 50/hr for client_1
        When: It is moved to client_2 billing 80/hr
        Then: The rate becomes 80 and the amount follows
        """
        mock_task_repo.get_by_id = AsyncMock(return_value=make_task())
        mock_task_repo.update = AsyncMock(side_effect=lambda task: task)
        mock_client_repo.get_by_id = AsyncMock(
            return_value=make_client(id="client_2", hourly_rate=Decimal("80"))
        )

        command = UpdateTaskCommandDTO(tenant_id=TENANT_ID, task_id="task_1", client_id="client_2")
        result = await UpdateTask(mock_uow, mock_task_repo, mock_client_repo).execute(command)

        assert result.value.client_id == "client_2"
        assert result.value.hourly_rate == Decimal("80")
        assert result.value.amount == Decimal("160.000000")

    async def test_invoiced_task_cannot_change_client(
        self, mock_uow, mock_task_repo, mock_client_repo
    ):
        mock_task_repo.get_by_id = AsyncMock(
            return_value=make_task(invoiced=True, invoice_id="invoice_1")
        )
        mock_task_repo.update = AsyncMock()

        command = UpdateTaskCommandDTO(tenant_id=TENANT_ID, task_id="task_1", client_id="client_2")
        result = await UpdateTask(mock_uow, mock_task_repo, mock_client_repo).execute(command)

        assert result.error.code == "TASK_INVOICED"
        mock_task_repo.update.assert_not_called()


@pytest.mark.asyncio
class TestDeleteTask:

    async def test_deletes_uninvoiced_task(self, mock_uow, mock_task_repo):
        task = make_task()
        mock_task_repo.get_by_id = AsyncMock(return_value=task)
        mock_task_repo.delete = AsyncMock()

        result = await DeleteTask(mock_uow, mock_task_repo).execute(TENANT_ID, "task_1")

        assert result.is_ok()
        mock_task_repo.delete.assert_called_once_with(task)

    async def test_invoiced_task_conflicts(self, mock_uow, mock_task_repo):
        mock_task_repo.get_by_id = AsyncMock(
            return_value=make_task(invoiced=True, invoice_id="invoice_1")
        )
        mock_task_repo.delete = AsyncMock()

        result = await DeleteTask(mock_uow, mock_task_repo).execute(TENANT_ID, "task_1")

        assert result.error.code == "TASK_INVOICED"
        assert result.error.kind == ErrorKind.CONFLICT
        mock_task_repo.delete.assert_not_called()


@pytest.mark.asyncio
class TestTaskListings:

    async def test_unbilled_filters_uninvoiced(self, mock_task_repo, mock_client_repo):
        mock_client_repo.get_by_id = AsyncMock(return_value=make_client())
        mock_task_repo.list = AsyncMock(return_value=([make_task()], 1))

        result = await GetUnbilledTasksByClient(mock_task_repo, mock_client_repo).execute(
            TENANT_ID, "client_1"
        )

        assert result.value.total == 1
        call = mock_task_repo.list.call_args
        assert call.kwargs["invoiced"] is False
        assert call.kwargs["client_id"] == "client_1"

    async def test_recent_uses_thirty_day_window(self, mock_task_repo):
        mock_task_repo.list = AsyncMock(return_value=([], 0))

        await GetRecentTasks(mock_task_repo).execute(TENANT_ID)

        since = mock_task_repo.list.call_args.kwargs["created_since"]
        assert utcnow() - since >= timedelta(days=30)
        assert utcnow() - since < timedelta(days=30, minutes=1)

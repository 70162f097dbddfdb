"""ReconcileInvoicedTasks Use Case

Detects drift between task invoiced flags and the invoices that bill them.
"""

import logging
import time
from typing import List
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.task_repository import TaskRepository
from src.app.use_cases import errors
from src.domain.base import utcnow
from .dtos import TaskDriftDTO, ReconciliationResultDTO

logger = logging.getLogger(__name__)

ORPHANED_FLAG = "orphaned_flag"
MISSING_FLAG = "missing_flag"


class ReconcileInvoicedTasks:
    """
    Use Case: Reconcile task flags against invoices

    Business Rules:
    1. Orphaned flag: task is invoiced but its invoice no longer exists
    2. Missing flag: an invoice line bills the task but it is not invoiced
    3. With repair enabled, orphaned tasks are released back to the
       unbilled pool; missing flags are only reported
    4. Scans all tenants

    Flow:
    1. Find orphaned and missing flags
    2. Optionally release orphaned tasks
    3. Return reconciliation result with all drifts
    """

    def __init__(self, uow: UnitOfWork, task_repo: TaskRepository, repair: bool = False):
        self.uow = uow
        self.task_repo = task_repo
        self.repair = repair

    async def execute(self) -> Result[ReconciliationResultDTO]:
        start_time = time.time()
        reconciliation_time = utcnow()

        try:
            logger.info("Starting invoiced task reconciliation")

            # Step 1: Find drift
            orphans = await self.task_repo.get_invoiced_orphans()
            unflagged = await self.task_repo.get_unflagged_billed()

            drifts: List[TaskDriftDTO] = []

            # Step 2: Orphans, released when repairing
            repaired = 0
            for task in orphans:
                logger.warning(
                    f"Task {task.id} (tenant {task.tenant_id}) flagged invoiced "
                    f"but invoice {task.invoice_id} is missing"
                )
                drift = TaskDriftDTO(
                    tenant_id=task.tenant_id,
                    task_id=task.id,
                    invoice_id=task.invoice_id,
                    drift=ORPHANED_FLAG,
                )
                if self.repair:
                    task.invoiced = False
                    task.invoice_id = None
                    task.updated_at = reconciliation_time
                    await self.task_repo.update(task)
                    drift.repaired = True
                    repaired += 1
                drifts.append(drift)

            for task in unflagged:
                logger.warning(
                    f"Task {task.id} (tenant {task.tenant_id}) is billed but not flagged invoiced"
                )
                drifts.append(
                    TaskDriftDTO(
                        tenant_id=task.tenant_id,
                        task_id=task.id,
                        invoice_id=task.invoice_id,
                        drift=MISSING_FLAG,
                    )
                )

            if repaired:
                await self.uow.commit()

            # Step 3: Build response
            execution_time_ms = int((time.time() - start_time) * 1000)

            response = ReconciliationResultDTO(
                orphaned_flags=len(orphans),
                missing_flags=len(unflagged),
                repaired=repaired,
                drifts=drifts,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )

            if drifts:
                logger.warning(
                    f"Reconciliation complete. Found {len(drifts)} drifted tasks, "
                    f"repaired {repaired}, in {execution_time_ms}ms"
                )
            else:
                logger.info(f"Reconciliation complete. No drift found in {execution_time_ms}ms")

            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Invoiced task reconciliation failed: {e}")
            return Return.err(
                errors.internal("RECONCILIATION_FAILED", "Failed to reconcile invoiced tasks", e)
            )

"""CreateInvoice Use Case

Bills a set of un-invoiced tasks to a client as a draft invoice.
"""

import logging
from typing import Dict, List, Optional, Tuple
from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.task_repository import TaskRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.use_cases import errors
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLine
from src.domain.task import Task
from src.domain.money import HUNDRED, ZERO, compute_subtotal, compute_total
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create a draft invoice from tasks

    Business Rules:
    1. task_ids must be non-empty and unique
    2. tax_rate must be within [0, 100]; due_date must not precede issue_date
    3. Every task must exist in the tenant, belong to the client and be un-invoiced
    4. subtotal = sum(task.amount); total = subtotal + subtotal * tax_rate / 100
    5. Invoice number comes from the tenant's sequence (INV-000001)
    6. A task is claimed by at most one invoice

    Flow (single transaction):
    1. Validate input
    2. Load client, lock tasks
    3. Validate task ownership and invoiced flag
    4. Compute subtotal and total
    5. Reserve number, insert invoice and lines
    6. Claim tasks with a conditional update
    7. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        client_repo: ClientRepository,
        task_repo: TaskRepository,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        currency: str = "USD",
    ):
        self.uow = uow
        self.client_repo = client_repo
        self.task_repo = task_repo
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.currency = currency

    @staticmethod
    def _check_tasks(
        task_ids: List[str], by_id: Dict[str, Task], client_id: str
    ) -> Tuple[List[Task], Optional[Error]]:
        tasks = []
        for task_id in task_ids:
            task = by_id.get(task_id)
            if task is None:
                return [], errors.not_found("task", task_id)
            if task.client_id != client_id:
                return [], errors.validation(
                    "TASK_CLIENT_MISMATCH",
                    f"Task {task_id} does not belong to client {client_id}",
                )
            if task.invoiced:
                return [], errors.conflict(
                    "TASK_ALREADY_INVOICED",
                    f"Task {task_id} is already invoiced",
                    reason=f"invoice_id={task.invoice_id}",
                )
            tasks.append(task)
        return tasks, None

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with client, tasks, dates and tax

        Returns:
            Result[InvoiceResponseDTO]: Success with the draft invoice or error
        """
        if not command.tenant_id:
            return Return.err(errors.unauthenticated())

        # Step 1: Validate input
        if not command.task_ids:
            return Return.err(
                errors.validation("NO_TASKS", "At least one task is required")
            )

        if len(set(command.task_ids)) != len(command.task_ids):
            return Return.err(
                errors.validation("DUPLICATE_TASKS", "Task IDs must be unique")
            )

        if command.tax_rate < ZERO or command.tax_rate > HUNDRED:
            return Return.err(
                errors.validation("INVALID_TAX_RATE", "Tax rate must be between 0 and 100")
            )

        if command.due_date is not None and command.due_date < command.issue_date:
            return Return.err(
                errors.validation("INVALID_DUE_DATE", "Due date cannot be before issue date")
            )

        try:
            # Step 2: Load client and lock tasks
            client = await self.client_repo.get_by_id(command.tenant_id, command.client_id)
            if not client:
                return Return.err(errors.not_found("client", command.client_id))

            locked = await self.task_repo.get_by_ids(
                command.tenant_id, command.task_ids, for_update=True
            )
            by_id = {task.id: task for task in locked}

            # Step 3: Validate tasks, keeping the requested order
            tasks, error = self._check_tasks(command.task_ids, by_id, client.id)
            if error:
                # rollback expires loaded rows, so the error is built first
                await self.uow.rollback()
                return Return.err(error)

            # Step 4: Totals from the snapshotted task amounts
            subtotal = compute_subtotal(task.amount for task in tasks)
            total = compute_total(subtotal, command.tax_rate)

            # Step 5: Number, invoice and lines
            number = await self.invoice_repo.next_invoice_number(command.tenant_id)

            invoice = Invoice(
                tenant_id=command.tenant_id,
                number=number,
                client_id=client.id,
                status=InvoiceStatus.DRAFT,
                issue_date=command.issue_date,
                due_date=command.due_date,
                subtotal=subtotal,
                tax_rate=command.tax_rate,
                total=total,
                currency=self.currency,
                notes=command.notes,
            )
            created = await self.invoice_repo.create(invoice)

            lines = await self.invoice_line_repo.create_many(
                [
                    InvoiceLine(
                        invoice_id=created.id,
                        task_id=task.id,
                        position=position,
                        description=task.description,
                        hours=task.hours,
                        hourly_rate=task.hourly_rate,
                        amount=task.amount,
                    )
                    for position, task in enumerate(tasks)
                ]
            )

            # Step 6: Claim tasks; a short count means a concurrent invoice won
            claimed = await self.task_repo.mark_invoiced(
                command.tenant_id, [task.id for task in tasks], created.id
            )
            if claimed != len(tasks):
                await self.uow.rollback()
                logger.warning(
                    f"Invoice creation for tenant {command.tenant_id} lost a race: "
                    f"claimed {claimed} of {len(tasks)} tasks"
                )
                return Return.err(
                    errors.conflict(
                        "TASK_ALREADY_INVOICED",
                        "One or more tasks were invoiced concurrently",
                        reason=f"claimed={claimed}, requested={len(tasks)}",
                    )
                )

            # Step 7: Commit
            await self.uow.commit()

            logger.info(
                f"Created invoice {created.number} for tenant {command.tenant_id}: "
                f"client={client.id}, tasks={len(tasks)}, total={created.total}"
            )

            return Return.ok(InvoiceResponseDTO.from_entity(created, lines))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Invoice creation failed for tenant {command.tenant_id}: {e}")
            return Return.err(
                errors.internal("CREATE_INVOICE_FAILED", "Failed to create invoice", e)
            )

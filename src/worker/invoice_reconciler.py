"""Invoiced Task Reconciliation Background Worker

Periodically checks task invoiced flags against the invoices that bill them.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.task_repository import SqlAlchemyTaskRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import ReconcileInvoicedTasks, ReconciliationResultDTO
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class InvoiceReconcilerWorker:
    """
    Background worker for invoiced task reconciliation

    Features:
    - Finds tasks flagged invoiced whose invoice is gone
    - Finds billed tasks missing the invoiced flag
    - Optionally releases orphaned tasks (RECONCILIATION_REPAIR)
    - Can run once or continuously

    Usage:
        worker = InvoiceReconcilerWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=3600)
    """

    def __init__(self, db_uri: Optional[str] = None, repair: Optional[bool] = None):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            repair: Release orphaned tasks (defaults to ApplicationConfig.RECONCILIATION_REPAIR)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.repair = ApplicationConfig.RECONCILIATION_REPAIR if repair is None else repair

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info(f"InvoiceReconcilerWorker initialized (repair={self.repair})")

    async def run_once(self) -> ReconciliationResultDTO:
        """
        Run reconciliation once

        Returns:
            ReconciliationResultDTO with reconciliation results
        """
        if not ApplicationConfig.RECONCILIATION_ENABLED:
            logger.info("Invoiced task reconciliation is disabled, skipping")
            return ReconciliationResultDTO(
                orphaned_flags=0,
                missing_flags=0,
                repaired=0,
                drifts=[],
                reconciliation_time=utcnow(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            use_case = ReconcileInvoicedTasks(
                uow=SqlAlchemyUnitOfWork(session),
                task_repo=SqlAlchemyTaskRepository(session),
                repair=self.repair,
            )

            result = await use_case.execute()

            if result.is_err():
                logger.error(f"Reconciliation failed: {result.error.message}")
                raise RuntimeError(f"Reconciliation failed: {result.error.message}")

            response = result.value

            unrepaired = [d for d in response.drifts if not d.repaired]
            if unrepaired:
                logger.error(f"ALERT: {len(unrepaired)} tasks out of sync with their invoices")
                for d in unrepaired:
                    logger.error(
                        f"  - Tenant {d.tenant_id}: task {d.task_id} "
                        f"({d.drift}, invoice_id={d.invoice_id})"
                    )

            return response

    async def run_forever(self, interval_seconds: int = 3600):
        """
        Run reconciliation continuously at specified interval

        Args:
            interval_seconds: Seconds between reconciliation runs (default: 1 hour)
        """
        logger.info(
            f"Starting continuous invoiced task reconciliation with {interval_seconds}s interval"
        )

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Reconciliation cycle complete. "
                    f"orphaned={result.orphaned_flags}, missing={result.missing_flags}, "
                    f"repaired={result.repaired} in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Reconciliation cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("InvoiceReconcilerWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.invoice_reconciler --once

        # Run continuously, releasing orphaned tasks
        python -m src.worker.invoice_reconciler --interval 600 --repair
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Invoiced Task Reconciliation Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: RECONCILIATION_INTERVAL_SECONDS)"
    )
    parser.add_argument(
        "--repair", action="store_true", default=None,
        help="Release tasks whose invoice no longer exists"
    )
    args = parser.parse_args()

    worker = InvoiceReconcilerWorker(repair=args.repair)

    try:
        if args.once:
            result = await worker.run_once()
            print("Reconciliation complete:")
            print(f"  Orphaned flags: {result.orphaned_flags}")
            print(f"  Missing flags: {result.missing_flags}")
            print(f"  Repaired: {result.repaired}")
            print(f"  Execution time: {result.execution_time_ms}ms")
            if result.drifts:
                print("\nDrifted tasks:")
                for d in result.drifts:
                    print(
                        f"  - Tenant {d.tenant_id}: task {d.task_id} "
                        f"{d.drift} (invoice_id={d.invoice_id}, repaired={d.repaired})"
                    )
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())

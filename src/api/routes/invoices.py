"""Invoice API Routes

FastAPI routes for the invoice lifecycle: create, edit, send, pay, delete
and render.
"""

import base64
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    UpdateInvoiceRequestSchema,
    UpdateInvoiceStatusRequestSchema,
    SendInvoiceRequestSchema,
)
from src.app.services.mail_service import MailService
from src.app.services.pdf_service import PdfService
from src.app.use_cases.invoices import (
    CreateInvoice,
    UpdateInvoice,
    UpdateInvoiceStatus,
    MarkInvoicePaid,
    DeleteInvoice,
    SendInvoice,
    GetInvoice,
    GetInvoiceData,
    ListInvoices,
    GenerateInvoicePdf,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    SendInvoiceCommandDTO,
    ListInvoicesQueryDTO,
    InvoiceResponseDTO,
    InvoiceDetailDTO,
    InvoiceDataDTO,
    ListInvoicesResponseDTO,
    SendInvoiceResponseDTO,
    InvoicePdfResponseDTO,
)
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.repositories.task_repository import SqlAlchemyTaskRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.business_profile_repository import SqlAlchemyBusinessProfileRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.invoice import InvoiceStatus
from src.depends import get_session, get_tenant_id, get_mail_service, get_pdf_service
from src.api.error import ClientError

router = APIRouter(prefix="/invoices", tags=["Invoices"])

INVOICE_NOT_FOUND_RESPONSE = {
    "description": "Invoice not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVOICE_NOT_FOUND",
                    "message": "Invoice 0b8e2f4c-1111-4c3a-9f25-8d7c2a1e5b10 not found"
                }
            }
        }
    }
}

TRANSITION_CONFLICT_RESPONSE = {
    "description": "Status change not allowed",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVALID_STATUS_TRANSITION",
                    "message": "Invoice INV-000001 cannot move from paid to sent"
                }
            }
        }
    }
}


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "A task is already invoiced",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "TASK_ALREADY_INVOICED",
                            "message": "Task 6ec0bd7f-11c0-43da-975e-2a8ad9ebae0b is already invoiced"
                        }
                    }
                }
            }
        },
        404: {
            "description": "Client or task not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "TASK_NOT_FOUND",
                            "message": "Task 6ec0bd7f-11c0-43da-975e-2a8ad9ebae0b not found"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "TASK_CLIENT_MISMATCH",
                            "message": "Task 6ec0bd7f-11c0-43da-975e-2a8ad9ebae0b does not belong to client"
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Create a draft invoice billing a client's un-invoiced tasks.

    Everything happens in one transaction: the tasks are locked, totals are
    computed from their snapshotted amounts, the next invoice number is
    reserved, lines are written and the tasks are flagged invoiced.

    **Request body:**
    - `client_id` (required): Client being billed
    - `task_ids` (required): Non-empty list of unique task IDs
    - `issue_date` (required), `due_date` (optional, >= issue_date)
    - `tax_rate` (optional): Percentage 0-100, default 0
    - `notes` (optional)

    **Example request:**
    ```json
    {
      "client_id": "1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed",
      "task_ids": ["6ec0bd7f-11c0-43da-975e-2a8ad9ebae0b"],
      "issue_date": "2024-02-01",
      "tax_rate": "10"
    }
    ```

    **Returns:**
    - 201: Invoice created (status=draft)
    - 400: Invalid request or task of another client
    - 404: Client or task not found
    - 409: A task is already invoiced
    """
    command = CreateInvoiceCommandDTO(
        tenant_id=tenant_id,
        client_id=request.client_id,
        task_ids=request.task_ids,
        issue_date=request.issue_date,
        due_date=request.due_date,
        tax_rate=request.tax_rate,
        notes=request.notes,
    )

    use_case = CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyTaskRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        currency=ApplicationConfig.DEFAULT_CURRENCY,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=ListInvoicesResponseDTO)
async def list_invoices(
    client_id: Optional[str] = None,
    invoice_status: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    query = ListInvoicesQueryDTO(
        tenant_id=tenant_id,
        client_id=client_id,
        status=invoice_status,
        limit=limit,
        offset=offset,
    )

    use_case = ListInvoices(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(query)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailDTO,
    responses={404: INVOICE_NOT_FOUND_RESPONSE}
)
async def get_invoice(
    invoice_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Invoice with its client and line items.
    """
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(tenant_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}/data",
    response_model=InvoiceDataDTO,
    responses={404: INVOICE_NOT_FOUND_RESPONSE}
)
async def get_invoice_data(
    invoice_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Invoice detail plus the sender's business profile, as used by the hosted
    preview page.
    """
    use_case = GetInvoiceData(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyBusinessProfileRepository(session),
    )
    result = await use_case.execute(tenant_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: INVOICE_NOT_FOUND_RESPONSE, 409: TRANSITION_CONFLICT_RESPONSE}
)
async def update_invoice(
    invoice_id: str,
    request: UpdateInvoiceRequestSchema,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Edit invoice dates, tax rate, notes or status.

    A tax change recomputes the total from the stored subtotal.
    Paid invoices are read-only (409 INVOICE_PAID).
    """
    command = UpdateInvoiceCommandDTO(
        tenant_id=tenant_id,
        invoice_id=invoice_id,
        **request.model_dump(exclude_unset=True),
    )

    use_case = UpdateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyTaskRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    responses={404: INVOICE_NOT_FOUND_RESPONSE, 409: TRANSITION_CONFLICT_RESPONSE}
)
async def update_invoice_status(
    invoice_id: str,
    request: UpdateInvoiceStatusRequestSchema,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Move an invoice along draft -> sent -> paid (sent -> draft recalls it).

    **Returns:**
    - 200: Status updated
    - 404: Invoice not found
    - 409: Transition not allowed (paid is final)
    """
    use_case = UpdateInvoiceStatus(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyTaskRepository(session),
    )
    result = await use_case.execute(tenant_id, invoice_id, request.status)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{invoice_id}/paid",
    response_model=InvoiceResponseDTO,
    responses={404: INVOICE_NOT_FOUND_RESPONSE, 409: TRANSITION_CONFLICT_RESPONSE}
)
async def mark_invoice_paid(
    invoice_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Record payment: status becomes paid and every billed task completed.
    """
    use_case = MarkInvoicePaid(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyTaskRepository(session),
    )
    result = await use_case.execute(tenant_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{invoice_id}/send",
    response_model=SendInvoiceResponseDTO,
    responses={
        404: INVOICE_NOT_FOUND_RESPONSE,
        409: TRANSITION_CONFLICT_RESPONSE,
        502: {
            "description": "E-mail delivery failed",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "EMAIL_DELIVERY_FAILED",
                            "message": "Failed to send invoice e-mail"
                        }
                    }
                }
            }
        }
    }
)
async def send_invoice(
    invoice_id: str,
    request: Optional[SendInvoiceRequestSchema] = None,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session),
    mail_service: MailService = Depends(get_mail_service)
):
    """
    E-mail the invoice to the client (or the given recipient).

    The e-mail links to the hosted invoice preview. Transient delivery
    failures are retried with exponential backoff. The invoice becomes
    `sent` only after delivery succeeded.

    **Returns:**
    - 200: Invoice sent
    - 404: Invoice not found
    - 409: Invoice is already paid
    - 502: E-mail could not be delivered; invoice unchanged
    """
    request = request or SendInvoiceRequestSchema()

    command = SendInvoiceCommandDTO(
        tenant_id=tenant_id,
        invoice_id=invoice_id,
        recipient_email=request.recipient_email,
        recipient_name=request.recipient_name,
        message=request.message,
    )

    use_case = SendInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyTaskRepository(session),
        SqlAlchemyBusinessProfileRepository(session),
        mail_service,
        ApplicationConfig.APP_BASE_URL,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


def _pdf_use_case(session: AsyncSession, pdf_service: PdfService) -> GenerateInvoicePdf:
    return GenerateInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyBusinessProfileRepository(session),
        pdf_service,
    )


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: INVOICE_NOT_FOUND_RESPONSE
    }
)
async def download_invoice_pdf(
    invoice_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service)
):
    """
    Download the invoice as a PDF file.

    **Returns:**
    - 200: PDF file as binary response
    - 404: Invoice not found
    """
    result = await _pdf_use_case(session, pdf_service).execute(tenant_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    pdf_bytes = base64.b64decode(result.value.pdf_base64)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=invoice_{result.value.number}.pdf"
        }
    )


@router.get(
    "/{invoice_id}/pdf/base64",
    response_model=InvoicePdfResponseDTO,
    responses={404: INVOICE_NOT_FOUND_RESPONSE}
)
async def get_invoice_pdf_base64(
    invoice_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service)
):
    result = await _pdf_use_case(session, pdf_service).execute(tenant_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: INVOICE_NOT_FOUND_RESPONSE}
)
async def delete_invoice(
    invoice_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Delete an invoice; its tasks return to the unbilled pool.
    """
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyTaskRepository(session),
    )
    result = await use_case.execute(tenant_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)

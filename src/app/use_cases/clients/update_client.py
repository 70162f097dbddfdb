"""UpdateClient Use Case

Edits a client's details. Rates already snapshotted onto tasks stay as
they are.
"""

from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases import errors
from src.domain.base import utcnow
from src.domain.client import ClientStatus, is_valid_email, normalize_email
from .dtos import UpdateClientCommandDTO, ClientResponseDTO


class UpdateClient:
    """
    Use Case: Update a client

    Business Rules:
    1. Email format and non-negative rate are validated
    2. Client must belong to the caller's tenant
    3. A new email must not be used by any other client of the tenant
    4. An active client must not share its email with another active
       client, including when an archived client is reactivated
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, command: UpdateClientCommandDTO) -> Result[ClientResponseDTO]:
        if not command.tenant_id:
            return Return.err(errors.unauthenticated())

        if not is_valid_email(command.email):
            return Return.err(
                errors.validation("INVALID_EMAIL", f"Invalid email format: {command.email}")
            )

        if command.hourly_rate < 0:
            return Return.err(
                errors.validation("INVALID_HOURLY_RATE", "Hourly rate cannot be negative")
            )

        email = normalize_email(command.email)

        try:
            client = await self.client_repo.get_by_id(command.tenant_id, command.client_id)
            if not client:
                return Return.err(errors.not_found("client", command.client_id))

            status = command.status or client.status
            if email != client.email:
                email_in_use = await self.client_repo.find_by_email(
                    command.tenant_id, email, exclude_id=client.id
                )
            elif status == ClientStatus.ACTIVE:
                email_in_use = await self.client_repo.find_by_email(
                    command.tenant_id, email, exclude_id=client.id, active_only=True
                )
            else:
                email_in_use = None
            if email_in_use:
                return Return.err(errors.client_email_exists(email))

            client.name = command.name.strip()
            client.email = email
            client.address = command.address
            client.hourly_rate = command.hourly_rate
            if command.phone is not None:
                client.phone = command.phone
            if command.website is not None:
                client.website = command.website
            client.status = status
            client.updated_at = utcnow()

            updated = await self.client_repo.update(client)
            await self.uow.commit()

            return Return.ok(ClientResponseDTO.from_entity(updated))

        except IntegrityError:
            await self.uow.rollback()
            return Return.err(errors.client_email_exists(email))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal("UPDATE_CLIENT_FAILED", "Failed to update client", e))

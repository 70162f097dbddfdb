"""CreateClient Use Case

Registers a new client for a tenant.
"""

import logging
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases import errors
from src.domain.client import Client, ClientStatus, is_valid_email, normalize_email
from .dtos import CreateClientCommandDTO, ClientResponseDTO

logger = logging.getLogger(__name__)


class CreateClient:
    """
    Use Case: Create a client

    Business Rules:
    1. Email must look like local@domain.tld
    2. hourly_rate must be >= 0
    3. No other active client of the tenant may use the same email
       (archived clients do not block reuse)
    4. New clients start with status=active
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, command: CreateClientCommandDTO) -> Result[ClientResponseDTO]:
        if not command.tenant_id:
            return Return.err(errors.unauthenticated())

        if not command.name.strip():
            return Return.err(errors.validation("INVALID_NAME", "Client name is required"))

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
            existing = await self.client_repo.find_by_email(
                command.tenant_id, email, active_only=True
            )
            if existing:
                return Return.err(errors.client_email_exists(email))

            client = Client(
                tenant_id=command.tenant_id,
                name=command.name.strip(),
                email=email,
                address=command.address,
                phone=command.phone,
                website=command.website,
                hourly_rate=command.hourly_rate,
                status=ClientStatus.ACTIVE,
            )
            created = await self.client_repo.create(client)
            await self.uow.commit()

            logger.info(f"Client {created.id} created for tenant {command.tenant_id}")
            return Return.ok(ClientResponseDTO.from_entity(created))

        except IntegrityError:
            # A concurrent request claimed the email first
            await self.uow.rollback()
            logger.warning(f"Duplicate active email for tenant {command.tenant_id}: {email}")
            return Return.err(errors.client_email_exists(email))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create client for tenant {command.tenant_id}: {e}")
            return Return.err(errors.internal("CREATE_CLIENT_FAILED", "Failed to create client", e))

"""Integration tests for Invoice API endpoints"""

import pytest
from decimal import Decimal
from httpx import AsyncClient


async def seed_billable_work(client: AsyncClient) -> tuple[str, list[str]]:
    acme = (
        await client.post(
            "/clients",
            json={"name": "Acme Corp", "email": "billing@acme.example", "hourly_rate": "50"},
        )
    ).json()

    task_ids = []
    for hours in ("2", "3"):
        task = (
            await client.post(
                "/tasks",
                json={
                    "client_id": acme["id"],
                    "description": f"{hours}h of work",
                    "hours": hours,
                    "work_date": "2024-01-15",
                },
            )
        ).json()
        task_ids.append(task["id"])

    return acme["id"], task_ids


async def create_invoice(client: AsyncClient, client_id: str, task_ids: list[str]):
    return await client.post(
        "/invoices",
        json={
            "client_id": client_id,
            "task_ids": task_ids,
            "issue_date": "2024-02-01",
            "due_date": "2024-03-01",
            "tax_rate": "10",
        },
    )


class TestInvoicesAPIIntegration:

    @pytest.mark.asyncio
    async def test_full_invoice_flow(self, client: AsyncClient, mail_service):
        """
        Given: A 50/hr client with 2h and 3h of unbilled work
        When: The work is invoiced, sent and paid
        Then: Totals are 250/275, the client is e-mailed and the work leaves the unbilled pool
        """
        client_id, task_ids = await seed_billable_work(client)

        response = await create_invoice(client, client_id, task_ids)
        assert response.status_code == 201
        invoice = response.json()
        assert invoice["number"] == "INV-000001"
        assert Decimal(invoice["subtotal"]) == Decimal("250")
        assert Decimal(invoice["total"]) == Decimal("275")
        assert invoice["task_ids"] == task_ids

        unbilled = (await client.get(f"/tasks/unbilled/{client_id}")).json()
        assert unbilled["total"] == 0

        response = await client.post(f"/invoices/{invoice['id']}/send")
        assert response.status_code == 200
        assert response.json()["invoice"]["status"] == "sent"
        assert mail_service.sent[0].to == "billing@acme.example"

        response = await client.post(f"/invoices/{invoice['id']}/paid")
        assert response.status_code == 200
        assert response.json()["status"] == "paid"

        tasks = (await client.get("/tasks", params={"client_id": client_id})).json()["tasks"]
        assert {task["status"] for task in tasks} == {"completed"}

        stats = (await client.get("/dashboard/stats")).json()
        assert Decimal(stats["paid_amount"]) == Decimal("275")
        assert Decimal(stats["unbilled_amount"]) == Decimal("0")

    @pytest.mark.asyncio
    async def test_double_billing_conflicts(self, client: AsyncClient):
        client_id, task_ids = await seed_billable_work(client)
        assert (await create_invoice(client, client_id, task_ids[:1])).status_code == 201

        response = await create_invoice(client, client_id, task_ids)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "TASK_ALREADY_INVOICED"

    @pytest.mark.asyncio
    async def test_paid_invoice_cannot_go_back(self, client: AsyncClient):
        client_id, task_ids = await seed_billable_work(client)
        invoice = (await create_invoice(client, client_id, task_ids)).json()
        await client.post(f"/invoices/{invoice['id']}/paid")

        response = await client.put(f"/invoices/{invoice['id']}/status", json={"status": "sent"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    @pytest.mark.asyncio
    async def test_paid_invoice_cannot_be_edited(self, client: AsyncClient):
        client_id, task_ids = await seed_billable_work(client)
        invoice = (await create_invoice(client, client_id, task_ids)).json()
        await client.post(f"/invoices/{invoice['id']}/paid")

        response = await client.patch(f"/invoices/{invoice['id']}", json={"tax_rate": "20"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVOICE_PAID"
        stored = (await client.get(f"/invoices/{invoice['id']}")).json()
        assert Decimal(stored["invoice"]["total"]) == Decimal("275")

    @pytest.mark.asyncio
    async def test_other_clients_task_is_rejected(self, client: AsyncClient):
        _, task_ids = await seed_billable_work(client)
        globex = (
            await client.post(
                "/clients",
                json={"name": "Globex", "email": "ap@globex.example", "hourly_rate": "40"},
            )
        ).json()

        response = await create_invoice(client, globex["id"], task_ids)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "TASK_CLIENT_MISMATCH"

    @pytest.mark.asyncio
    async def test_failed_delivery_keeps_draft(self, client: AsyncClient, mail_service):
        client_id, task_ids = await seed_billable_work(client)
        invoice = (await create_invoice(client, client_id, task_ids)).json()
        mail_service.fail = True

        response = await client.post(f"/invoices/{invoice['id']}/send")

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "EMAIL_DELIVERY_FAILED"
        detail = (await client.get(f"/invoices/{invoice['id']}")).json()
        assert detail["invoice"]["status"] == "draft"

    @pytest.mark.asyncio
    async def test_delete_returns_tasks_to_pool(self, client: AsyncClient):
        client_id, task_ids = await seed_billable_work(client)
        invoice = (await create_invoice(client, client_id, task_ids)).json()

        response = await client.delete(f"/invoices/{invoice['id']}")

        assert response.status_code == 204
        assert (await client.get(f"/invoices/{invoice['id']}")).status_code == 404
        unbilled = (await client.get(f"/tasks/unbilled/{client_id}")).json()
        assert unbilled["total"] == 2

    @pytest.mark.asyncio
    async def test_pdf_download(self, client: AsyncClient):
        client_id, task_ids = await seed_billable_work(client)
        invoice = (await create_invoice(client, client_id, task_ids)).json()

        response = await client.get(f"/invoices/{invoice['id']}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_empty_task_list_is_rejected(self, client: AsyncClient):
        client_id, _ = await seed_billable_work(client)

        response = await create_invoice(client, client_id, [])

        assert response.status_code == 400

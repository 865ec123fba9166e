"""Read endpoints backing the invoice pages."""

from fastapi import APIRouter

from api.base import success_response


def create_data_router(services: dict) -> APIRouter:
    router = APIRouter()

    @router.get("/invoices")
    async def list_invoices():
        invoices = services["invoice"].list_invoices()
        return success_response(
            [i.model_dump(mode="json") for i in invoices]
        ).model_dump(mode="json")

    @router.get("/invoices/{invoice_id}")
    async def get_invoice(invoice_id: str):
        invoice = services["invoice"].get_invoice(invoice_id)
        if invoice is None:
            raise ValueError(f"Invoice {invoice_id} not found")
        return success_response(invoice.model_dump(mode="json")).model_dump(mode="json")

    return router

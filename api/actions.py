"""Invoice form submissions: create, update, delete."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from api.base import success_response, form_state_response
from core.models import FormState, Redirect


def _render(result: Redirect | FormState | None):
    """Turn a service outcome into an HTTP response."""
    if isinstance(result, Redirect):
        # 303 so the browser follows with GET
        return RedirectResponse(result.path, status_code=303)
    if isinstance(result, FormState):
        status, body = form_state_response(result)
        return JSONResponse(status_code=status, content=body.model_dump(mode="json"))
    return success_response(None).model_dump(mode="json")


def create_actions_router(services: dict) -> APIRouter:
    """
    Routes for invoice mutations.

    services is looked up per request so it can be filled in by the app's
    lifespan after the router is mounted.
    """
    router = APIRouter()

    @router.post("/invoices")
    async def create_invoice(request: Request):
        form = await request.form()
        return _render(services["invoice"].create_invoice(None, form))

    @router.post("/invoices/{invoice_id}")
    async def update_invoice(invoice_id: str, request: Request):
        form = await request.form()
        return _render(services["invoice"].update_invoice(invoice_id, None, form))

    @router.delete("/invoices/{invoice_id}")
    async def delete_invoice(invoice_id: str):
        return _render(services["invoice"].delete_invoice(invoice_id))

    return router

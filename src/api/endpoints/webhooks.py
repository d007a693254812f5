import logging
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_body(request: Request) -> Dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post("/webhook/shopify/products", tags=["Webhooks"], response_class=PlainTextResponse)
async def shopify_products_webhook(request: Request):
    """
    Shopify products/create|update|delete webhook.
    Acknowledges immediately and schedules a debounced resync; the sync itself
    never runs inside this request.
    """
    payload = await _read_body(request)
    logger.info("Product updated in Shopify: %s", payload.get("title") or "Produto")
    request.app.state.debouncer.notify()
    return PlainTextResponse("OK", status_code=200)

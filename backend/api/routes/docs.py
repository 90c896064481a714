"""
API description endpoint.

Serves the generated OpenAPI document with its server URL pointed at
whichever host the request came in on, so the document works unchanged
behind proxies and on preview deployments.
"""

import copy
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter()


def request_origin(request: Request) -> str:
    """scheme://host of the incoming request, honouring proxy headers."""
    scheme = request.headers.get("x-forwarded-proto") or request.url.scheme
    host = request.headers.get("x-forwarded-host") or request.headers.get("host") or request.url.netloc
    # Proxies may append a comma-separated chain; the first hop is the client's view
    scheme = scheme.split(",")[0].strip()
    host = host.split(",")[0].strip()
    return f"{scheme}://{host}"


@router.get("/docs", include_in_schema=False)
async def get_api_document(request: Request) -> dict[str, Any]:
    """Return the OpenAPI document with servers rewritten to the request origin."""
    document = copy.deepcopy(request.app.openapi())
    document["servers"] = [{"url": request_origin(request)}]
    return document

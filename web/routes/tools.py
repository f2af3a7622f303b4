from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from web.deps import get_dispatcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools")


@router.get("")
async def list_tools(request: Request):
    dispatcher = get_dispatcher(request)
    return {"tools": dispatcher.list_tools()}


@router.post("/call")
async def call_tool(request: Request):
    dispatcher = get_dispatcher(request)
    try:
        body = await request.json()
    except json.JSONDecodeError:
        logger.warning("POST /tools/call with a non-JSON body")
        return JSONResponse(
            {"content": [{"type": "text", "text": "Error: request body must be JSON"}], "isError": True},
            status_code=400,
        )

    name = body.get("name") if isinstance(body, dict) else None
    arguments = body.get("arguments") if isinstance(body, dict) else None
    if not isinstance(name, str) or (arguments is not None and not isinstance(arguments, dict)):
        return JSONResponse(
            {"content": [{"type": "text", "text": "Error: expected {\"name\", \"arguments\"}"}], "isError": True},
            status_code=400,
        )

    logger.info("POST /tools/call name=%s", name)
    result = await dispatcher.call(name, arguments)
    return JSONResponse(result.to_dict(), status_code=400 if result.is_error else 200)

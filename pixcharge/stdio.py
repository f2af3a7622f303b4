"""Line-oriented JSON-RPC 2.0 transport over stdin/stdout.

One request per line, one response per line. Notifications (messages
without an ``id``) are processed but never answered.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import IO, Any

from pixcharge.constants import SERVER_NAME, SERVER_VERSION
from pixcharge.tools import ToolDispatcher

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


def _error(message_id: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": message_id, "error": {"code": code, "message": message}}


def _result(message_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": message_id, "result": result}


class StdioServer:
    def __init__(self, dispatcher: ToolDispatcher) -> None:
        self.dispatcher = dispatcher

    async def handle_line(self, line: str) -> dict[str, Any] | None:
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Discarding unparseable line (%d chars)", len(line))
            return _error(None, PARSE_ERROR, "Parse error")
        if not isinstance(message, dict):
            return _error(None, INVALID_REQUEST, "Invalid request")
        return await self.handle_message(message)

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        message_id = message.get("id")
        method = message.get("method")
        params = message.get("params")
        if not isinstance(params, dict):
            params = {}
        is_notification = "id" not in message

        if not isinstance(method, str):
            return None if is_notification else _error(message_id, INVALID_REQUEST, "Invalid request")

        if method == "initialize":
            response = _result(
                message_id,
                {
                    "protocolVersion": PROTOCOL_VERSION,
                    "capabilities": {"tools": {}},
                    "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
                },
            )
        elif method == "ping":
            response = _result(message_id, {})
        elif method == "tools/list":
            response = _result(message_id, {"tools": self.dispatcher.list_tools()})
        elif method == "tools/call":
            name = params.get("name")
            arguments = params.get("arguments")
            if not isinstance(name, str) or (arguments is not None and not isinstance(arguments, dict)):
                response = _error(message_id, INVALID_PARAMS, "tools/call needs a name and an arguments object")
            else:
                result = await self.dispatcher.call(name, arguments)
                response = _result(message_id, result.to_dict())
        elif method.startswith("notifications/"):
            return None
        else:
            response = _error(message_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        return None if is_notification else response

    async def serve(self, reader: IO[str] | None = None, writer: IO[str] | None = None) -> None:
        reader = reader or sys.stdin
        writer = writer or sys.stdout
        logger.info("Pix server started in stdio mode")
        while True:
            line = await asyncio.to_thread(reader.readline)
            if not line:
                break
            if not line.strip():
                continue
            response = await self.handle_line(line)
            if response is not None:
                writer.write(json.dumps(response, ensure_ascii=False) + "\n")
                writer.flush()
        logger.info("stdin closed, stopping")

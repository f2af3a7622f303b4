import asyncio
import io
import json

from pixcharge.services.charge_service import PixChargeService
from pixcharge.services.static_pix_service import StaticPixService
from pixcharge.stdio import METHOD_NOT_FOUND, PARSE_ERROR, StdioServer
from pixcharge.tools import ToolDispatcher
from tests.conftest import SucceedingProvider, fake_renderer


def _server() -> StdioServer:
    dispatcher = ToolDispatcher(
        PixChargeService([SucceedingProvider("stub")]),
        StaticPixService(renderer=fake_renderer),
    )
    return StdioServer(dispatcher)


def _handle(server: StdioServer, message) -> dict | None:
    return asyncio.run(server.handle_line(json.dumps(message)))


class TestStdioServer:
    def test_initialize(self):
        response = _handle(_server(), {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}})
        assert response["id"] == 1
        assert response["result"]["serverInfo"]["name"] == "pix-mcp-server"
        assert response["result"]["capabilities"] == {"tools": {}}

    def test_ping(self):
        assert _handle(_server(), {"jsonrpc": "2.0", "id": "a", "method": "ping"}) == {
            "jsonrpc": "2.0",
            "id": "a",
            "result": {},
        }

    def test_tools_list(self):
        response = _handle(_server(), {"jsonrpc": "2.0", "id": 2, "method": "tools/list"})
        names = [tool["name"] for tool in response["result"]["tools"]]
        assert "createPixCharge" in names

    def test_tools_call(self):
        message = {
            "jsonrpc": "2.0",
            "id": 3,
            "method": "tools/call",
            "params": {"name": "healthCheck", "arguments": {}},
        }
        response = _handle(_server(), message)
        assert "healthy" in response["result"]["content"][0]["text"]
        assert "isError" not in response["result"]

    def test_tools_call_error_result(self):
        message = {
            "jsonrpc": "2.0",
            "id": 4,
            "method": "tools/call",
            "params": {"name": "nope"},
        }
        response = _handle(_server(), message)
        assert response["result"]["isError"] is True

    def test_tools_call_without_name(self):
        response = _handle(_server(), {"jsonrpc": "2.0", "id": 5, "method": "tools/call", "params": {}})
        assert response["error"]["code"] == -32602

    def test_notification_gets_no_reply(self):
        assert _handle(_server(), {"jsonrpc": "2.0", "method": "notifications/initialized"}) is None

    def test_unknown_method(self):
        response = _handle(_server(), {"jsonrpc": "2.0", "id": 6, "method": "resources/list"})
        assert response["error"]["code"] == METHOD_NOT_FOUND

    def test_parse_error(self):
        response = asyncio.run(_server().handle_line("{not json"))
        assert response["error"]["code"] == PARSE_ERROR

    def test_serve_reads_until_eof(self):
        lines = [
            json.dumps({"jsonrpc": "2.0", "id": 1, "method": "ping"}),
            "",
            json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
            json.dumps({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}),
        ]
        reader = io.StringIO("\n".join(lines) + "\n")
        writer = io.StringIO()

        asyncio.run(_server().serve(reader, writer))

        responses = [json.loads(line) for line in writer.getvalue().splitlines()]
        assert [r["id"] for r in responses] == [1, 2]

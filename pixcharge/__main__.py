import asyncio
import sys

from pixcharge.logging import configure_logging
from pixcharge.settings import settings


async def serve_stdio() -> None:
    from pixcharge.stdio import StdioServer
    from pixcharge.tools import get_dispatcher

    dispatcher = get_dispatcher(mode="stdio")
    try:
        await StdioServer(dispatcher).serve()
    finally:
        await dispatcher.aclose()


def main() -> None:
    # stdout carries JSON-RPC in stdio mode
    configure_logging(stream=sys.stderr)

    mode = sys.argv[1] if len(sys.argv) > 1 else settings.server_mode

    if mode == "cli":
        from pixcharge.cli.app import main_menu

        main_menu()
    elif mode == "http":
        import uvicorn

        uvicorn.run("web.app:app", host=settings.host, port=settings.port, log_config=None)
    elif mode == "stdio":
        asyncio.run(serve_stdio())
    else:
        raise SystemExit(f"Unknown mode: {mode} (expected stdio, http or cli)")


if __name__ == "__main__":
    main()

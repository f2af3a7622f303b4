from fastapi import Request

from pixcharge.tools import ToolDispatcher


def get_dispatcher(request: Request) -> ToolDispatcher:
    return request.app.state.dispatcher

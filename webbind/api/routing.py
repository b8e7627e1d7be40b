"""
Where: webbind/api/routing.py
What: Register plain handler functions as FastAPI routes with bound arguments.
Why: Handlers declare RequestParam markers instead of FastAPI Query/File params.
"""

import logging
from typing import Any, Callable, List, Optional

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from ..services.invoker import HandlerInvoker
from .deps import BinderFactoryDep, WebRequestDep

logger = logging.getLogger("webbind.routing")


def add_bound_route(
    app: FastAPI,
    path: str,
    handler: Callable[..., Any],
    methods: Optional[List[str]] = None,
    name: Optional[str] = None,
) -> HandlerInvoker:
    """
    Register a handler whose arguments are resolved from the request.

    Descriptors are built here, once; a parameter no resolver supports fails
    registration rather than the first request.

    Args:
        app: application created by create_app (argument_resolvers on app.state)
        path: route path
        handler: plain or async function
        methods: HTTP methods (default: GET)
        name: route name (default: handler name)

    Returns:
        HandlerInvoker used by the route

    Raises:
        IllegalStateError: when the handler signature cannot be bound
    """
    invoker = HandlerInvoker(handler, app.state.argument_resolvers, app.state.binder_factory)

    async def endpoint(web_request: WebRequestDep, binder_factory: BinderFactoryDep):
        result = await invoker.invoke(web_request, binder_factory)
        if isinstance(result, Response):
            return result
        return JSONResponse(content=jsonable_encoder(result))

    route_methods = [method.upper() for method in (methods or ["GET"])]
    app.add_api_route(
        path,
        endpoint,
        methods=route_methods,
        name=name or handler.__name__,
        include_in_schema=False,
    )
    logger.info(
        f"Registered bound route {','.join(route_methods)} {path} -> {handler.__qualname__}",
        extra={"path": path, "parameters": len(invoker.descriptors)},
    )
    return invoker

"""
webbind application factory.

Assembles a FastAPI app whose routes bind request parameters, uploaded files
and multipart parts to plain handler functions.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .config import BindingConfig, config
from .core.binder import WebDataBinderFactory
from .core.logging_config import setup_logging
from .exceptions import register_exception_handlers
from .middleware import request_id_middleware
from .services.composite import default_resolvers

logger = logging.getLogger("webbind.main")


def create_app(app_config: Optional[BindingConfig] = None) -> FastAPI:
    """
    Create an application ready for add_bound_route.

    Args:
        app_config: settings to use (default: the environment-loaded config)
    """
    app_config = app_config or config
    setup_logging(app_config.LOG_CONFIG_PATH)

    app = FastAPI(root_path=app_config.root_path)

    # Store in app.state for DI
    app.state.config = app_config
    app.state.argument_resolvers = default_resolvers(app_config.USE_DEFAULT_RESOLUTION)
    app.state.binder_factory = WebDataBinderFactory.from_config(app_config)

    app.middleware("http")(request_id_middleware)
    register_exception_handlers(app)

    logger.info(
        "webbind application initialized",
        extra={
            "use_default_resolution": app_config.USE_DEFAULT_RESOLUTION,
            "trim_empty_strings": app_config.TRIM_EMPTY_STRINGS,
            "multipart_enabled": app_config.MULTIPART_ENABLED,
        },
    )
    return app

"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import web_router
from .middleware.errors import ErrorHandlingMiddleware, register_exception_handlers
from .middleware.logging import LoggingMiddleware


def create_app(
    store,
    registrar,
    relay,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        store: Mapping store instance
        registrar: LinkRegistrar instance
        relay: ProxyRelay instance
        config: Configuration instance
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Proxy Shortlink",
        description="Short links that stream their target through this service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        # /p must not redirect to /p/; only listed paths exist
        redirect_slashes=False,
    )
    
    # Store instances in app state for access in routes
    app.state.store = store
    app.state.registrar = registrar
    app.state.relay = relay
    app.state.config = config
    
    register_exception_handlers(app)
    
    # Last added runs first: CORS answers preflights before anything else
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Range"],
        expose_headers=["Content-Length", "Content-Range", "Accept-Ranges"],
    )
    
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])
    
    return app

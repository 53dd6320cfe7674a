import logging

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from addrbook import __version__
from addrbook.api.addrbook import router as addrbook_router
from addrbook.config import settings
from addrbook.db import Base, SessionLocal, engine
from addrbook.errors import register_error_handlers
from addrbook.logging import configure_logging
from addrbook.services.address_book import AddressBookService
from addrbook.services.auth import TokenVerifier
from addrbook.services.gateway import AuthorizationGateway

logger = logging.getLogger(__name__)


def _default_gateway() -> AuthorizationGateway:
    if settings.auto_create_schema:
        Base.metadata.create_all(engine)
        logger.info("database schema ensured")
    return AuthorizationGateway(
        AddressBookService(SessionLocal), TokenVerifier.from_settings(settings)
    )


def create_app(gateway: AuthorizationGateway | None = None) -> FastAPI:
    """Build the API; serve with ``uvicorn addrbook.main:create_app --factory``."""
    configure_logging()
    app = FastAPI(title="addrbook API", version=__version__)
    register_error_handlers(app)
    app.state.gateway = gateway or _default_gateway()
    app.include_router(addrbook_router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/metrics")
    def metrics():
        data = generate_latest()
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    return app

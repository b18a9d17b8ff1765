from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hostelia.config import get_settings
from hostelia.infrastructure.database import engine, initialize_database
from hostelia.infrastructure.logging_config import configure_logging
from hostelia.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationPublisher,
)
from hostelia.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the database tables on startup and release resources on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app(manager: NotificationConnectionManager | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The live connection registry is created here, once per process, and
    exposed through ``app.state`` so routes and use cases receive it by
    injection. Pass ``manager`` to substitute a test double.
    """

    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title="Hostelia Notifications", lifespan=lifespan)
    if manager is None:
        manager = NotificationConnectionManager()
    app.state.notification_manager = manager
    app.state.notification_publisher = NotificationPublisher(manager)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()

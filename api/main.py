from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from core import db
from core.callable import callable_error_handler, request_validation_error_handler
from core.config import Settings
from core.errors import CallableError
from core.logging_setup import configure_logging
from core.places import PlacesClient
from core.store import RecordStore
from counts import router as counts_router
from donations import router as donations_router
from profiles import router as profiles_router
from verifications import router as verifications_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    settings: Settings = app.state.settings
    app.state.store = RecordStore()
    app.state.places = PlacesClient(
        api_key=settings.google_maps_api_key,
        base_url=settings.places_base_url,
        timeout_s=settings.places_timeout_s,
    )
    # Initialize the DB pool once per process.
    await db.init_pool(settings.database_url)
    try:
        yield
    finally:
        await db.close_pool()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings

    # Allow the admin frontend to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CallableError, callable_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(counts_router.router, tags=["counts"])
    app.include_router(profiles_router.router, tags=["profiles"])
    app.include_router(verifications_router.router, tags=["verifications"])
    app.include_router(donations_router.router, tags=["donations"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


# `uvicorn main:app`, or `uvicorn --factory main:create_app` to defer reading
# the environment until the server starts.
app = create_app()

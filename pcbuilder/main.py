"""PC Build Engine — HTTP surface

Thin FastAPI layer over the in-process engine:
  1. Catalog browsing, facet filtering and lookups
  2. The current session build (select / remove / save)
  3. Component comparison

All computation lives in the engine modules. The build session is held in
memory per application instance and is lost on restart.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pcbuilder.catalog.accessor import load_catalog
from pcbuilder.config import Settings, get_settings
from pcbuilder.routers import build, catalog, compare
from pcbuilder.services.build_session import BuildSession

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    application = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description=(
            "Compatibility checking, wattage planning, faceted catalog "
            "filtering and component comparison for custom PC builds."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:8081",
            "http://localhost:19006",
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.settings = settings
    application.state.catalog = load_catalog(settings.catalog_path)
    application.state.build_session = BuildSession()

    # ─── Catalog ───
    application.include_router(
        catalog.router, prefix="/api/catalog", tags=["Catalog"]
    )

    # ─── Session build ───
    application.include_router(build.router, prefix="/api/build", tags=["Build"])

    # ─── Comparison ───
    application.include_router(
        compare.router, prefix="/api/compare", tags=["Compare"]
    )

    @application.get("/health")
    async def health_check():
        return {"status": "ok", "service": "pcbuild-engine", "version": "0.1.0"}

    logger.info("%s ready (%s)", settings.app_name, settings.env)
    return application


app = create_app()

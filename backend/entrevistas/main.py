import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from . import config
from .api import reclutadores as reclutadores_api
from .api import solicitudes as solicitudes_api
from .bootstrap import run_migrations
from .context import AppContext, build_context
from .utils.error_handlers import create_error_response, get_error_message

logger = logging.getLogger(__name__)

_default_origins = ["http://localhost:5173", "http://127.0.0.1:5173"]


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return create_error_response(exc.status_code, exc.detail)

    @app.exception_handler(OperationalError)
    async def sqlalchemy_operational_error_handler(request: Request, exc: OperationalError):
        """Handle database connectivity errors."""
        logger.exception("Database OperationalError: %s", exc)
        return create_error_response(503, get_error_message("database_error"))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database SQLAlchemyError: %s", exc)
        return create_error_response(500, get_error_message("database_error"))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return create_error_response(500, get_error_message("server_error"))


def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Build the API. With an explicit `context` (tests) it is used as-is;
    otherwise the schema is bootstrapped and the context built at startup.
    """
    app = FastAPI(title="Entrevistas API")

    app.include_router(solicitudes_api.router)
    app.include_router(reclutadores_api.router)
    _register_exception_handlers(app)

    extra_origins = [
        origin.strip()
        for origin in (config.FRONTEND_ORIGINS or "").split(",")
        if origin.strip()
    ]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[*_default_origins, *extra_origins],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.context = context
    app.state.db_init_error = None

    @app.on_event("startup")
    def on_startup() -> None:
        if app.state.context is not None:
            return
        try:
            run_migrations(config.DATABASE_URL, sslmode=config.DATABASE_SSLMODE)
        except Exception as e:
            app.state.db_init_error = str(e)
            logger.exception("Database bootstrap failed")
            raise
        app.state.context = build_context()
        logger.info("Database ready")

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        if app.state.context is not None:
            app.state.context.close()

    @app.get("/health")
    def health_check():
        return {"status": "Backend running", "service": "Entrevistas API"}

    @app.get("/db/health")
    def db_health():
        if app.state.db_init_error:
            raise HTTPException(status_code=503, detail=f"DB init failed: {app.state.db_init_error}")
        if app.state.context is None:
            raise HTTPException(status_code=503, detail="DB not initialised")

        try:
            with app.state.context.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise HTTPException(status_code=503, detail=f"DB connection failed: {e}")

        return {"status": "ok"}

    return app


app = create_app()


def serve() -> None:
    import uvicorn

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    serve()

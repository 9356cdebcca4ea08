import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.config import Settings, load_settings, validate_runtime_config
from storefront.core.errors import StorefrontError
from storefront.database import build_engine, build_session_factory, create_tables
from storefront.routes import auth_routes, order_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        create_tables(app.state.engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')
    yield


async def handle_storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={'success': False, 'message': exc.message},
        headers=exc.headers,
    )


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    settings = settings or load_settings()
    validate_runtime_config(settings)
    logging.getLogger('storefront').setLevel(settings.LOG_LEVEL)

    app = FastAPI(title='Storefront API', lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine or build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    app.state.session_factory = build_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.CORS_ALLOW_ORIGINS),
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    app.add_exception_handler(StorefrontError, handle_storefront_error)

    @app.get('/')
    def root():
        return {'status': 'Storefront API Running'}

    app.include_router(auth_routes.router, prefix='/api/v1/auth')
    app.include_router(order_routes.router, prefix='/api/v1/auth')
    return app


app = create_app()

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.core import config
from backend.core.errors import CredentialServiceError, InternalError
from backend.database import Base, engine, ensure_certificate_schema
from backend.models import certificate, exam_result, fingerprint, user  # noqa: F401
from backend.routes import auth_routes, certificate_routes, fingerprint_routes, result_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = 'Server error'

app = FastAPI(
    title='Exam Result Verification API',
    description='API for exam results and certificate issuance',
    version='1.0.0',
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.exception_handler(CredentialServiceError)
async def handle_service_error(request: Request, exc: CredentialServiceError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error('Internal error on %s %s: %s', request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={'detail': SERVER_ERROR_MESSAGE})
    return JSONResponse(status_code=exc.status_code, content={'detail': exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': 'Invalid request', 'errors': jsonable_errors(exc)},
    )


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception('Database error on %s %s', request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={'detail': SERVER_ERROR_MESSAGE})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={'detail': SERVER_ERROR_MESSAGE})


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {'loc': list(error.get('loc', ())), 'msg': error.get('msg', '')}
        for error in exc.errors()
    ]


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_certificate_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Exam Result Verification API Running', 'docs': '/docs'}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(fingerprint_routes.router, prefix='/fingerprint')
app.include_router(result_routes.router, prefix='/results')
app.include_router(certificate_routes.router, prefix='/certificates')

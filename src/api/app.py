import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from src.adapter.database import Database
from src.adapter.services.razorpay_gateway import RazorpayGateway
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.plans import SeedPlansUseCase
from src.domain.errors import ErrorCode
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details:
        error_dict["details"] = exc.base_error.details
    logger.warning(f"Client error: {exc.base_error.code} on {request.method} {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": ErrorCode.VALIDATION_ERROR,
                "message": "Invalid request",
                "details": {"errors": errors},
            }
        },
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info(f"{request.method} {request.url.path} {status_code} {duration_ms}ms")


def build_payment_gateway(ApplicationConfig) -> PaymentGateway:
    return RazorpayGateway(
        key_id=ApplicationConfig.RAZORPAY_KEY_ID,
        key_secret=ApplicationConfig.RAZORPAY_KEY_SECRET,
        base_url=ApplicationConfig.RAZORPAY_BASE_URL,
        timeout_seconds=ApplicationConfig.PAYMENT_PROVIDER_TIMEOUT_SECONDS,
    )


def create_app(
    ApplicationConfig,
    database: Optional[Database] = None,
    payment_gateway: Optional[PaymentGateway] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    The database and payment gateway are created here (or injected by tests)
    and closed when the application shuts down.
    """
    database = database or Database(ApplicationConfig.DB_URI)
    payment_gateway = payment_gateway or build_payment_gateway(ApplicationConfig)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.AUTO_CREATE_TABLES:
            await database.create_all()
        if ApplicationConfig.SEED_PLANS:
            async with database.session() as session:
                result = await SeedPlansUseCase(SqlAlchemyUnitOfWork(session)).execute()
                logger.info(f"Plan seed complete, {result.value} created")
        yield
        await payment_gateway.aclose()
        await database.dispose()

    app = FastAPI(title="Clinic Billing API", version="0.1.0", lifespan=lifespan)
    app.state.database = database
    app.state.payment_gateway = payment_gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    from src.api.routes import admin, auth, doctors, health_check, payments, plans, subscription

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(plans.router, tags=["Plans"])
    app.include_router(payments.router, tags=["Payments"])
    app.include_router(subscription.router, tags=["Subscription"])
    app.include_router(doctors.router, tags=["Doctors"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app

"""GDMS FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gdms.api.devices import router as devices_router
from gdms.api.gateways import router as gateways_router
from gdms.api.health import router as health_router
from gdms.config import settings
from gdms.errors import Conflict, GDMSError, Invalid, NotFound

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Conflict: status.HTTP_409_CONFLICT,
    Invalid: status.HTTP_400_BAD_REQUEST,
}

app = FastAPI(
    title="GDMS - Gateway & Device Management Service",
    description="Manages IoT gateways, their peripheral devices and the gateway audit trail",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GDMSError)
async def domain_error_handler(request: Request, exc: GDMSError) -> JSONResponse:
    code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=code, content={"detail": exc.detail})


app.include_router(health_router, tags=["Health"])
app.include_router(gateways_router, tags=["Gateways"])
app.include_router(devices_router, tags=["Devices"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "GDMS", "version": "0.1.0", "docs": "/docs"}

"""Main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from modbus_gateway import __version__
from modbus_gateway.api.dependencies import app_state
from modbus_gateway.api.routes import router as rpc_router
from modbus_gateway.core.config import Settings, setup_logging
from modbus_gateway.core.models import HealthResponse
from modbus_gateway.handler.service import ModbusService
from modbus_gateway.protocol.framers import framer_factory
from modbus_gateway.transport import build_transport

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    settings = app_state.settings or Settings()
    app_state.settings = settings

    setup_logging(settings.log_level)
    logger.info(f"Starting Modbus Gateway v{__version__} ({settings.link_description})")

    # The transport connects lazily on the first call
    app_state.transport = build_transport(settings)
    app_state.service = ModbusService(app_state.transport, framer_factory(settings.mode))

    yield

    # Shutdown
    logger.info("Shutting down...")
    if app_state.transport is not None:
        await app_state.transport.close()


app = FastAPI(
    title="Modbus Gateway",
    description="JSON-RPC gateway for Modbus master transactions",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(rpc_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Modbus Gateway",
        "version": __version__,
        "status": "running",
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    settings = app_state.settings

    if app_state.service is None or settings is None:
        return HealthResponse(status="unhealthy")

    return HealthResponse(status="healthy", mode=settings.mode, link=settings.link_description)


def main():
    """Run the application (for CLI entry point)."""
    import uvicorn

    settings = Settings()
    setup_logging(settings.log_level)
    app_state.settings = settings

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()

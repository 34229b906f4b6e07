"""FastAPI dependency injection for shared application state."""

from modbus_gateway.core.config import Settings
from modbus_gateway.handler.service import ModbusService
from modbus_gateway.transport import ModbusTransport


class AppState:
    """Holds shared application state instances.

    Created during app startup and accessed via FastAPI dependencies.
    """

    def __init__(self) -> None:
        self.settings: Settings | None = None
        self.transport: ModbusTransport | None = None
        self.service: ModbusService | None = None


# Global app state singleton
app_state = AppState()


def get_service() -> ModbusService:
    """Get the Modbus service instance."""
    assert app_state.service is not None, "App not initialized"
    return app_state.service


def get_settings() -> Settings:
    """Get the settings instance."""
    assert app_state.settings is not None, "App not initialized"
    return app_state.settings

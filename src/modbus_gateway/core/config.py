"""Application configuration using pydantic-settings."""

import logging
import sys
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    prefixed with MODBUS_GATEWAY_ (e.g., MODBUS_GATEWAY_MODE=rtu).
    """

    mode: Literal["tcp", "rtuovertcp", "rtu", "ascii"] = "tcp"
    tcp_host: str = "127.0.0.1"
    tcp_port: int = 502
    serial_port: str = "/dev/ttyUSB0"
    serial_baud: int = 19200
    serial_bytesize: int = 8
    serial_parity: Literal["N", "E", "O"] = "E"
    serial_stopbits: int = 1
    timeout: float = 1.0
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="MODBUS_GATEWAY_")

    @property
    def link_description(self) -> str:
        """Human-readable description of the configured Modbus link."""
        if self.mode in ("tcp", "rtuovertcp"):
            return f"{self.mode}://{self.tcp_host}:{self.tcp_port}"
        return f"{self.mode}:{self.serial_port}@{self.serial_baud}"


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

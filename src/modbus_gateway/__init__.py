"""JSON-RPC gateway for Modbus master transactions."""

__version__ = "0.1.0"

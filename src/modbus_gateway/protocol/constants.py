"""Modbus protocol constants."""

# ============================================================================
# Exception Codes
# ============================================================================

EXCEPTION_NAMES = {
    0x01: "illegal function",
    0x02: "illegal data address",
    0x03: "illegal data value",
    0x04: "server device failure",
    0x05: "acknowledge",
    0x06: "server device busy",
    0x08: "memory parity error",
    0x0A: "gateway path unavailable",
    0x0B: "gateway target device failed to respond",
}

# ============================================================================
# Quantity Limits
# ============================================================================

MAX_READ_BITS = 2000
MAX_READ_REGISTERS = 125
MAX_WRITE_BITS = 1968
MAX_WRITE_REGISTERS = 123

# Byte count field of a multiple write request
MAX_BYTE_COUNT = 0xFF

# ============================================================================
# Coil Values
# ============================================================================

COIL_OFF = 0x0000
COIL_ON = 0xFF00

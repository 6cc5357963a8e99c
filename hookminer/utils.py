import os
from datetime import datetime

from .errors import InputError


def log(message, add_timestamp=True):
    print(message)
    log_file = os.environ.get("LOG_FILE")
    if log_file:
        with open(log_file, "a") as file:
            if add_timestamp:
                file.write(datetime.now().strftime("%Y-%m-%d %H:%M:%S - "))
            file.write(f"{message}\n")


def to_hex32(value: bytes) -> str:
    return "0x" + value.hex()


def format_rate(attempts: int, elapsed: float) -> str:
    if elapsed <= 0:
        return "n/a"
    return f"{attempts / elapsed:,.0f}/s"


def hex_to_bytes(value, what="value") -> bytes:
    """Accept raw bytes or a hex string (with or without 0x) and return bytes."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise InputError(f"{what} must be bytes or a hex string, got {type(value).__name__}")
    digits = value[2:] if value[:2].lower() == "0x" else value
    if len(digits) % 2:
        raise InputError(f"{what} has an odd number of hex digits")
    try:
        return bytes.fromhex(digits)
    except ValueError:
        raise InputError(f"{what} is not valid hex: {value[:20]}...") from None

"""CREATE2 address derivation (EIP-1014).

    address = keccak256(0xff ++ factory ++ salt ++ keccak256(init_code))[12:]
"""

from eth_utils import is_address, keccak, to_canonical_address

from .abi_args import encode_constructor_args
from .errors import InputError
from .utils import hex_to_bytes

CREATE2_PREFIX = b"\xff"
ADDRESS_BYTES = 20
SALT_SPACE = 2**256


def derive_address(factory: bytes, salt: bytes, init_code_hash: bytes) -> bytes:
    """Return the 20-byte address a CREATE2 deployment would produce.

    Inputs are not checked here; callers validate lengths once with the
    parse_* helpers. engine.search inlines the same hash for its hot loop.
    """
    return keccak(CREATE2_PREFIX + factory + salt + init_code_hash)[12:]


def parse_bytecode(bytecode) -> bytes:
    return hex_to_bytes(bytecode, "bytecode")


def parse_address(address) -> bytes:
    if isinstance(address, (bytes, bytearray)):
        if len(address) != 20:
            raise InputError(f"Address must be 20 bytes, got {len(address)}")
        return bytes(address)
    if not isinstance(address, str) or not is_address(address):
        raise InputError(f"Invalid address: {address!r}")
    return to_canonical_address(address)


def parse_salt(salt) -> bytes:
    if isinstance(salt, int) and not isinstance(salt, bool):
        if not 0 <= salt < SALT_SPACE:
            raise InputError(f"Salt out of range: {salt}")
        return salt.to_bytes(32, "big")
    data = hex_to_bytes(salt, "salt")
    if len(data) != 32:
        raise InputError(f"Salt must be 32 bytes, got {len(data)}")
    return data


def init_code(bytecode, constructor_args=None) -> bytes:
    """Creation code followed by the ABI encoded constructor arguments."""
    return parse_bytecode(bytecode) + encode_constructor_args(constructor_args)


def init_code_hash(bytecode, constructor_args=None) -> bytes:
    return keccak(init_code(bytecode, constructor_args))

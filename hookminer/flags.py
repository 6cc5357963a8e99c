"""Hook permission flags encoded in the low-order bits of a hook address.

The bit layout follows Uniswap v4 ``Hooks.sol``: the pool manager reads the
last 14 bits of a hook contract address to decide which callbacks it invokes.
"""

from enum import Enum
from typing import Iterable

from .errors import InputError


class HookFlag(Enum):
    BEFORE_INITIALIZE = "BEFORE_INITIALIZE"
    AFTER_INITIALIZE = "AFTER_INITIALIZE"
    BEFORE_ADD_LIQUIDITY = "BEFORE_ADD_LIQUIDITY"
    AFTER_ADD_LIQUIDITY = "AFTER_ADD_LIQUIDITY"
    BEFORE_REMOVE_LIQUIDITY = "BEFORE_REMOVE_LIQUIDITY"
    AFTER_REMOVE_LIQUIDITY = "AFTER_REMOVE_LIQUIDITY"
    BEFORE_SWAP = "BEFORE_SWAP"
    AFTER_SWAP = "AFTER_SWAP"
    BEFORE_DONATE = "BEFORE_DONATE"
    AFTER_DONATE = "AFTER_DONATE"
    BEFORE_SWAP_RETURNS_DELTA = "BEFORE_SWAP_RETURNS_DELTA"
    AFTER_SWAP_RETURNS_DELTA = "AFTER_SWAP_RETURNS_DELTA"
    AFTER_ADD_LIQUIDITY_RETURNS_DELTA = "AFTER_ADD_LIQUIDITY_RETURNS_DELTA"
    AFTER_REMOVE_LIQUIDITY_RETURNS_DELTA = "AFTER_REMOVE_LIQUIDITY_RETURNS_DELTA"

    @property
    def bit(self) -> int:
        return 1 << FLAG_BITS[self]


FLAG_BITS = {
    HookFlag.BEFORE_INITIALIZE: 13,
    HookFlag.AFTER_INITIALIZE: 12,
    HookFlag.BEFORE_ADD_LIQUIDITY: 11,
    HookFlag.AFTER_ADD_LIQUIDITY: 10,
    HookFlag.BEFORE_REMOVE_LIQUIDITY: 9,
    HookFlag.AFTER_REMOVE_LIQUIDITY: 8,
    HookFlag.BEFORE_SWAP: 7,
    HookFlag.AFTER_SWAP: 6,
    HookFlag.BEFORE_DONATE: 5,
    HookFlag.AFTER_DONATE: 4,
    HookFlag.BEFORE_SWAP_RETURNS_DELTA: 3,
    HookFlag.AFTER_SWAP_RETURNS_DELTA: 2,
    HookFlag.AFTER_ADD_LIQUIDITY_RETURNS_DELTA: 1,
    HookFlag.AFTER_REMOVE_LIQUIDITY_RETURNS_DELTA: 0,
}

assert set(FLAG_BITS) == set(HookFlag), "every HookFlag needs a bit position"

ALL_HOOK_MASK = sum(1 << bit for bit in FLAG_BITS.values())


def encode_flags(flags: Iterable[HookFlag]) -> tuple[int, int]:
    """Return (mask, value) over the flag bits of an address.

    The mask always covers every flag bit, so unrequested permissions are
    required to be 0 rather than left free.
    """
    value = 0
    for flag in set(flags):
        value |= flag.bit
    return ALL_HOOK_MASK, value


def decode_flags(address: bytes) -> frozenset[HookFlag]:
    """Flags granted by an address, as the pool manager would read them."""
    bits = int.from_bytes(address, "big")
    return frozenset(flag for flag in HookFlag if bits & flag.bit)


def parse_flags(names) -> frozenset[HookFlag]:
    if isinstance(names, str):
        names = names.split(",")
    flags = set()
    for name in names:
        if isinstance(name, HookFlag):
            flags.add(name)
            continue
        key = name.strip().upper()
        if key == "":
            continue
        key = key.removesuffix("_FLAG")
        try:
            flags.add(HookFlag[key])
        except KeyError:
            raise InputError(f"Unknown hook flag: {name}") from None
    return frozenset(flags)

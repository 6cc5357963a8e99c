"""Typed constructor arguments appended to the creation code before hashing.

Each argument kind knows its ABI type and checks its own value; the packed
encoding itself is done by ``eth_abi.encode`` since dynamic types need the
head/tail layout of the whole tuple.
"""

import re
from dataclasses import dataclass
from typing import Sequence, Union

from eth_abi import encode
from eth_abi.exceptions import EncodingError
from eth_utils import is_address, to_checksum_address

from .errors import InputError
from .utils import hex_to_bytes


def _check_bits(bits):
    if bits % 8 or not 8 <= bits <= 256:
        raise InputError(f"Invalid integer size: {bits}")


def _check_int(value, kind):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InputError(f"{kind} expects an int, got {type(value).__name__}")


@dataclass(frozen=True)
class UintArg:
    value: int
    bits: int = 256

    def __post_init__(self):
        _check_bits(self.bits)
        _check_int(self.value, self.abi_type)
        if not 0 <= self.value < 2**self.bits:
            raise InputError(f"{self.value} does not fit in {self.abi_type}")

    @property
    def abi_type(self) -> str:
        return f"uint{self.bits}"

    @property
    def abi_value(self):
        return self.value


@dataclass(frozen=True)
class IntArg:
    value: int
    bits: int = 256

    def __post_init__(self):
        _check_bits(self.bits)
        _check_int(self.value, self.abi_type)
        bound = 2 ** (self.bits - 1)
        if not -bound <= self.value < bound:
            raise InputError(f"{self.value} does not fit in {self.abi_type}")

    @property
    def abi_type(self) -> str:
        return f"int{self.bits}"

    @property
    def abi_value(self):
        return self.value


@dataclass(frozen=True)
class AddressArg:
    value: Union[str, bytes]

    def __post_init__(self):
        if not is_address(self.value):
            raise InputError(f"Invalid address: {self.value!r}")

    @property
    def abi_type(self) -> str:
        return "address"

    @property
    def abi_value(self):
        return to_checksum_address(self.value)


@dataclass(frozen=True)
class BoolArg:
    value: bool

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise InputError(f"bool expects True or False, got {self.value!r}")

    @property
    def abi_type(self) -> str:
        return "bool"

    @property
    def abi_value(self):
        return self.value


@dataclass(frozen=True)
class BytesArg:
    value: Union[str, bytes]

    def __post_init__(self):
        hex_to_bytes(self.value, "bytes argument")

    @property
    def abi_type(self) -> str:
        return "bytes"

    @property
    def abi_value(self):
        return hex_to_bytes(self.value, "bytes argument")


@dataclass(frozen=True)
class FixedBytesArg:
    value: Union[str, bytes]
    size: int = 32

    def __post_init__(self):
        if not 1 <= self.size <= 32:
            raise InputError(f"Invalid fixed bytes size: {self.size}")
        data = hex_to_bytes(self.value, self.abi_type)
        if len(data) > self.size:
            raise InputError(f"{len(data)} bytes do not fit in {self.abi_type}")

    @property
    def abi_type(self) -> str:
        return f"bytes{self.size}"

    @property
    def abi_value(self):
        # right padded, as solidity stores short bytesN literals
        return hex_to_bytes(self.value, self.abi_type).ljust(self.size, b"\x00")


@dataclass(frozen=True)
class StringArg:
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise InputError(f"string expects a str, got {type(self.value).__name__}")

    @property
    def abi_type(self) -> str:
        return "string"

    @property
    def abi_value(self):
        return self.value


ConstructorArg = Union[UintArg, IntArg, AddressArg, BoolArg, BytesArg, FixedBytesArg, StringArg]

_TYPE_PATTERN = re.compile(r"^(uint|int|bytes)(\d*)$")


def arg_for_type(abi_type: str, value) -> ConstructorArg:
    """Build the argument kind matching a solidity type name."""
    abi_type = abi_type.strip()
    if abi_type == "address":
        return AddressArg(value)
    if abi_type == "bool":
        return BoolArg(value)
    if abi_type == "string":
        return StringArg(value)
    match = _TYPE_PATTERN.match(abi_type)
    if not match:
        raise InputError(f"Unsupported constructor argument type: {abi_type}")
    kind, size = match.groups()
    if kind == "bytes":
        return FixedBytesArg(value, int(size)) if size else BytesArg(value)
    bits = int(size) if size else 256
    return UintArg(value, bits) if kind == "uint" else IntArg(value, bits)


@dataclass(frozen=True)
class ConstructorArgs:
    args: tuple = ()

    @classmethod
    def from_types(cls, types: Sequence[str], values: Sequence) -> "ConstructorArgs":
        if len(types) != len(values):
            raise InputError(
                f"Constructor arity mismatch: {len(types)} types for {len(values)} values"
            )
        return cls(tuple(arg_for_type(t, v) for t, v in zip(types, values)))

    @property
    def types(self) -> list[str]:
        return [a.abi_type for a in self.args]

    def encode(self) -> bytes:
        if not self.args:
            return b""
        try:
            return encode(self.types, [a.abi_value for a in self.args])
        except (EncodingError, TypeError, ValueError) as e:
            raise InputError(f"Cannot encode constructor arguments: {e}") from e

    def __len__(self):
        return len(self.args)


def encode_constructor_args(args) -> bytes:
    """Encode constructor arguments given as ConstructorArgs, a sequence of
    argument kinds, or a {"types": [...], "value": [...]} mapping."""
    if args is None:
        return b""
    if isinstance(args, dict):
        args = ConstructorArgs.from_types(args.get("types", []), args.get("value", []))
    elif not isinstance(args, ConstructorArgs):
        args = tuple(args)
        for arg in args:
            if not hasattr(arg, "abi_type"):
                raise InputError(f"Untyped constructor argument: {arg!r}")
        args = ConstructorArgs(args)
    return args.encode()

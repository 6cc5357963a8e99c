"""Single worker salt search loop."""

import multiprocessing
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Union

from eth_utils import keccak

from .create2 import ADDRESS_BYTES, CREATE2_PREFIX, SALT_SPACE

DEFAULT_CHECK_INTERVAL = 1024


class CancelToken:
    """Shared stop signal for one mining run.

    Wraps a multiprocessing event so the same handle can be checked from the
    calling thread, other threads and worker processes. Setting it twice is
    the same as setting it once.
    """

    def __init__(self, event=None):
        self._event = event if event is not None else multiprocessing.Event()

    @property
    def event(self):
        return self._event

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class SaltStream:
    """Counters start, start + step, start + 2*step, ... as 32-byte big-endian salts.

    Counters wrap around modulo 2**256, so the stream never runs dry.
    """

    start: int = 0
    step: int = 1

    def __iter__(self):
        counter = self.start % SALT_SPACE
        while True:
            yield counter.to_bytes(32, "big")
            counter += self.step
            if counter >= SALT_SPACE:
                counter -= SALT_SPACE


@dataclass(frozen=True)
class Found:
    salt: bytes
    address: bytes
    attempts: int


@dataclass(frozen=True)
class Cancelled:
    attempts: int


@dataclass(frozen=True)
class Exhausted:
    attempts: int


Outcome = Union[Found, Cancelled, Exhausted]


def matches(address: bytes, mask: int, value: int) -> bool:
    return int.from_bytes(address, "big") & mask == value


def search(
    factory: bytes,
    init_code_hash: bytes,
    mask: int,
    value: int,
    salt_stream: Iterable[bytes],
    cancel_token: CancelToken,
    check_interval: int = DEFAULT_CHECK_INTERVAL,
) -> Outcome:
    """Try salts in stream order and return the first whose address matches.

    Same result as calling derive_address and matches per salt, but the
    0xff ++ factory prefix is built once and only the hash bytes covered by
    mask are compared. The cancel token is read once per batch of
    check_interval salts. Exhausted is only returned for finite iterables.
    """
    prefix = CREATE2_PREFIX + factory
    # mask bytes at the end of the 32-byte hash, never beyond the 20 address bytes
    tail = 32 - min((mask.bit_length() + 7) // 8, ADDRESS_BYTES)
    salts = iter(salt_stream)
    attempts = 0
    while True:
        if cancel_token.cancelled:
            return Cancelled(attempts)
        tried = 0
        for salt in islice(salts, check_interval):
            tried += 1
            digest = keccak(prefix + salt + init_code_hash)
            if int.from_bytes(digest[tail:], "big") & mask == value:
                return Found(salt, digest[12:], attempts + tried)
        attempts += tried
        if tried < check_interval:
            return Exhausted(attempts)

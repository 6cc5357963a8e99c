"""Runs the salt search over several worker processes and races them.

Worker i of n tries counters salt_offset + i, salt_offset + i + n, ... so the
workers never try the same salt twice. The first worker to report a match sets
the run's cancel token; the others stop at their next batch boundary and their
partial attempt counts are still added to the run statistics.
"""

import os
import signal
import threading
import time
from concurrent.futures import ProcessPoolExecutor, as_completed, wait
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from web3 import Web3

from .create2 import SALT_SPACE, parse_address
from .engine import (
    DEFAULT_CHECK_INTERVAL,
    CancelToken,
    Found,
    SaltStream,
    search,
)
from .errors import InputError, RunStateError
from .utils import format_rate, hex_to_bytes, log, to_hex32

ADDRESS_BITS = 160


class RunState(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    FOUND = "found"
    CANCELLED = "cancelled"


class SearchStatus(Enum):
    FOUND = "found"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SearchResult:
    status: SearchStatus
    attempts: int
    elapsed: float
    salt: Optional[bytes] = None
    address: Optional[bytes] = None
    worker: Optional[int] = None
    worker_attempts: tuple = ()

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def cancelled(self) -> bool:
        return self.status is SearchStatus.CANCELLED

    @property
    def checksum_address(self) -> Optional[str]:
        if self.address is None:
            return None
        return Web3.to_checksum_address(self.address)

    @property
    def salt_int(self) -> Optional[int]:
        if self.salt is None:
            return None
        return int.from_bytes(self.salt, "big")

    @property
    def rate(self) -> float:
        return self.attempts / self.elapsed if self.elapsed > 0 else 0.0


# cancel token of the pool this process belongs to, installed by _init_worker
_worker_token = None


def _init_worker(event):
    global _worker_token
    # ctrl-c is handled by the coordinating process, which cancels the run
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    _worker_token = CancelToken(event)


def _run_worker(index, factory, init_code_hash, mask, value, stream, check_interval):
    return index, search(
        factory, init_code_hash, mask, value, stream, _worker_token, check_interval
    )


class SearchScheduler:
    def __init__(
        self,
        factory,
        init_code_hash,
        mask: int,
        value: int,
        workers: Optional[int] = None,
        check_interval: int = DEFAULT_CHECK_INTERVAL,
        salt_offset: int = 0,
        cancel_token: Optional[CancelToken] = None,
        timeout: Optional[float] = None,
    ):
        self.factory = parse_address(factory)
        self.init_code_hash = hex_to_bytes(init_code_hash, "init code hash")
        if len(self.init_code_hash) != 32:
            raise InputError(
                f"Init code hash must be 32 bytes, got {len(self.init_code_hash)}"
            )
        if not 0 <= mask < 2**ADDRESS_BITS:
            raise InputError(f"Mask does not fit in an address: {mask:#x}")
        if value & ~mask:
            raise InputError(f"Value {value:#x} sets bits outside of mask {mask:#x}")
        if workers is None:
            workers = os.cpu_count() or 1
        if workers < 1:
            raise InputError(f"Need at least one worker, got {workers}")
        if check_interval < 1:
            raise InputError(f"Check interval must be positive, got {check_interval}")
        if not 0 <= salt_offset < SALT_SPACE:
            raise InputError(f"Salt offset out of range: {salt_offset}")
        if timeout is not None and timeout <= 0:
            raise InputError(f"Timeout must be positive, got {timeout}")

        self.mask = mask
        self.value = value
        self.workers = workers
        self.check_interval = check_interval
        self.salt_offset = salt_offset
        self.timeout = timeout
        self.cancel_token = cancel_token or CancelToken()
        self.state = RunState.IDLE

    def streams(self) -> list[SaltStream]:
        return [
            SaltStream(self.salt_offset + i, self.workers) for i in range(self.workers)
        ]

    def cancel(self):
        self.cancel_token.cancel()

    def run(self) -> SearchResult:
        if self.state is not RunState.IDLE:
            raise RunStateError(f"Run already {self.state.value}")
        self.state = RunState.SEARCHING
        log(
            f"Mining with {self.workers} worker(s), "
            f"mask {self.mask:#06x} value {self.value:#06x}"
        )

        timer = None
        if self.timeout is not None:
            timer = threading.Timer(self.timeout, self.cancel_token.cancel)
            timer.daemon = True
            timer.start()

        start = time.perf_counter()
        try:
            if self.workers == 1:
                outcome = search(
                    self.factory,
                    self.init_code_hash,
                    self.mask,
                    self.value,
                    self.streams()[0],
                    self.cancel_token,
                    self.check_interval,
                )
                outcomes = {0: outcome}
                winner = 0 if isinstance(outcome, Found) else None
            else:
                outcomes, winner = self._run_parallel()
        except BaseException:
            self.state = RunState.CANCELLED
            raise
        finally:
            if timer is not None:
                timer.cancel()
        elapsed = time.perf_counter() - start

        result = self._result(outcomes, winner, elapsed)
        self.state = RunState(result.status.value)
        if result.found:
            log(
                f"Found salt {to_hex32(result.salt)} => {result.checksum_address} "
                f"after {result.attempts:,} attempts ({format_rate(result.attempts, elapsed)})"
            )
        else:
            log(f"Search {result.status.value} after {result.attempts:,} attempts")
        return result

    def _run_parallel(self):
        outcomes = {}
        winner = None

        def record(future):
            nonlocal winner
            index, outcome = future.result()
            outcomes[index] = outcome
            if isinstance(outcome, Found) and winner is None:
                winner = index
                self.cancel_token.cancel()

        with ProcessPoolExecutor(
            max_workers=self.workers,
            initializer=_init_worker,
            initargs=(self.cancel_token.event,),
        ) as executor:
            futures = [
                executor.submit(
                    _run_worker,
                    i,
                    self.factory,
                    self.init_code_hash,
                    self.mask,
                    self.value,
                    stream,
                    self.check_interval,
                )
                for i, stream in enumerate(self.streams())
            ]
            try:
                for future in as_completed(futures):
                    record(future)
            except KeyboardInterrupt:
                log("Interrupted, stopping workers...")
                self.cancel_token.cancel()
                wait(futures)
                for future in futures:
                    if future.result()[0] not in outcomes:
                        record(future)
            finally:
                # a failed worker must not leave the others searching
                self.cancel_token.cancel()
        return outcomes, winner

    def _result(self, outcomes, winner, elapsed) -> SearchResult:
        worker_attempts = tuple(outcomes[i].attempts for i in sorted(outcomes))
        attempts = sum(worker_attempts)
        if winner is not None:
            found = outcomes[winner]
            return SearchResult(
                SearchStatus.FOUND,
                attempts,
                elapsed,
                salt=found.salt,
                address=found.address,
                worker=winner,
                worker_attempts=worker_attempts,
            )
        return SearchResult(
            SearchStatus.CANCELLED, attempts, elapsed, worker_attempts=worker_attempts
        )


def mine_salt(factory, init_code_hash, mask: int, value: int, **kwargs) -> SearchResult:
    return SearchScheduler(factory, init_code_hash, mask, value, **kwargs).run()

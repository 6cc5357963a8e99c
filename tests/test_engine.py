from itertools import islice

import pytest

from hookminer.create2 import SALT_SPACE, derive_address
from hookminer.engine import (
    CancelToken,
    Cancelled,
    Exhausted,
    Found,
    SaltStream,
    matches,
    search,
)

NEVER = 2**160 - 1  # full address mask with value 0, practically unreachable


def scan(factory, code_hash, mask, value, stream):
    for attempt, salt in enumerate(stream, start=1):
        address = derive_address(factory, salt, code_hash)
        if matches(address, mask, value):
            return salt, attempt


class TestSaltStream:
    def test_counter_encoding(self):
        assert list(islice(SaltStream(5, 2), 3)) == [c.to_bytes(32, "big") for c in (5, 7, 9)]

    def test_wraps_at_end_of_salt_space(self):
        assert list(islice(SaltStream(SALT_SPACE - 2, 3), 3)) == [
            (SALT_SPACE - 2).to_bytes(32, "big"),
            (1).to_bytes(32, "big"),
            (4).to_bytes(32, "big"),
        ]

    def test_partition_is_disjoint(self):
        counters = [
            {int.from_bytes(s, "big") for s in islice(SaltStream(i, 3), 50)} for i in range(3)
        ]
        assert counters[0].isdisjoint(counters[1])
        assert counters[1].isdisjoint(counters[2])
        assert set().union(*counters) == set(range(150))


class TestCancelToken:
    def test_idempotent(self):
        token = CancelToken()
        assert not token.cancelled
        token.cancel()
        token.cancel()
        assert token.cancelled


class TestSearch:
    def test_first_match_in_stream_order(self, factory, empty_code_hash):
        mask, value = 0xFF, 0x42
        outcome = search(factory, empty_code_hash, mask, value, SaltStream(), CancelToken(), 16)
        assert isinstance(outcome, Found)
        assert matches(outcome.address, mask, value)
        assert outcome.address == derive_address(factory, outcome.salt, empty_code_hash)
        expected_salt, expected_attempts = scan(factory, empty_code_hash, mask, value, SaltStream())
        assert outcome.salt == expected_salt
        assert outcome.attempts == expected_attempts

    def test_batch_size_does_not_change_winner(self, factory, empty_code_hash):
        results = {
            search(factory, empty_code_hash, 0x3F, 0x15, SaltStream(), CancelToken(), interval)
            for interval in (1, 7, 1024)
        }
        assert len(results) == 1

    def test_cancelled_before_start(self, factory, empty_code_hash):
        token = CancelToken()
        token.cancel()
        outcome = search(factory, empty_code_hash, 0, 0, SaltStream(), token)
        assert outcome == Cancelled(0)

    def test_finite_stream_exhausts(self, factory, empty_code_hash):
        salts = [bytes(32), (1).to_bytes(32, "big"), (2).to_bytes(32, "big")]
        outcome = search(factory, empty_code_hash, NEVER, 0, salts, CancelToken(), 2)
        assert outcome == Exhausted(3)

    @pytest.mark.parametrize(
        "mask,value",
        [(0x3, 0x2), (0xFF00, 0x1200), (0xF0000F, 0x500003), (1 << 159, 1 << 159)],
    )
    def test_agrees_with_derive_address(self, factory, empty_code_hash, mask, value):
        outcome = search(factory, empty_code_hash, mask, value, SaltStream(), CancelToken())
        assert outcome.address == derive_address(factory, outcome.salt, empty_code_hash)
        assert matches(outcome.address, mask, value)
        expected_salt, expected_attempts = scan(
            factory, empty_code_hash, mask, value, SaltStream()
        )
        assert (outcome.salt, outcome.attempts) == (expected_salt, expected_attempts)

    def test_empty_mask_matches_first_salt(self, factory, empty_code_hash):
        outcome = search(factory, empty_code_hash, 0, 0, SaltStream(9), CancelToken())
        assert outcome.salt == (9).to_bytes(32, "big")
        assert outcome.attempts == 1

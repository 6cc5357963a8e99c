from typing import Iterable, Optional

from .config import load_config
from .create2 import derive_address, init_code_hash, parse_address, parse_salt
from .engine import CancelToken
from .flags import HookFlag, decode_flags, encode_flags, parse_flags
from .scheduler import SearchResult, mine_salt


def mine(
    flags: Iterable[HookFlag],
    bytecode,
    constructor_args=None,
    factory=None,
    workers: Optional[int] = None,
    check_interval: Optional[int] = None,
    salt_offset: int = 0,
    cancel_token: Optional[CancelToken] = None,
    timeout: Optional[float] = None,
) -> SearchResult:
    """Find a salt that deploys bytecode to an address granting exactly flags.

    constructor_args may be a ConstructorArgs, a list of typed arguments, or a
    {"types": [...], "value": [...]} mapping. Settings left as None come from
    the environment (see load_config). Bad input raises InputError before any
    salt is tried.
    """
    config = load_config()
    factory = parse_address(factory if factory is not None else config.factory)
    code_hash = init_code_hash(bytecode, constructor_args)
    mask, value = encode_flags(parse_flags(flags))

    return mine_salt(
        factory,
        code_hash,
        mask,
        value,
        workers=workers if workers is not None else config.workers,
        check_interval=(
            check_interval if check_interval is not None else config.check_interval
        ),
        salt_offset=salt_offset,
        cancel_token=cancel_token,
        timeout=timeout if timeout is not None else config.timeout,
    )


def verify(factory, salt, bytecode, constructor_args, flags) -> bool:
    """Recompute the deployment address for salt and check its hook flags."""
    address = derive_address(
        parse_address(factory), parse_salt(salt), init_code_hash(bytecode, constructor_args)
    )
    return decode_flags(address) == parse_flags(flags)

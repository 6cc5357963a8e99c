from .errors import InputError, RunStateError  # noqa: F401
from .flags import ALL_HOOK_MASK, FLAG_BITS, HookFlag, decode_flags, encode_flags  # noqa: F401
from .create2 import derive_address, init_code, init_code_hash  # noqa: F401
from .abi_args import (  # noqa: F401
    AddressArg,
    BoolArg,
    BytesArg,
    ConstructorArgs,
    FixedBytesArg,
    IntArg,
    StringArg,
    UintArg,
)
from .engine import CancelToken, SaltStream, search  # noqa: F401
from .scheduler import SearchResult, SearchScheduler, SearchStatus, mine_salt  # noqa: F401
from .miner import mine, verify  # noqa: F401

from dotenv import load_dotenv

from hookminer import HookFlag, mine
from hookminer.config import load_config
from hookminer.flags import parse_flags
from hookminer.report import result_table

load_dotenv()

FLAGS = [HookFlag.BEFORE_ADD_LIQUIDITY]
BYTECODE = "0x"
CONSTRUCTOR_ARGS = {
    "types": [],
    "value": [],
}


def main():
    config = load_config()
    flags = parse_flags(config.flags) if config.flags else frozenset(FLAGS)
    result = mine(flags, BYTECODE, CONSTRUCTOR_ARGS)
    print(result_table(result, flags))


if __name__ == "__main__":
    main()

from texttable import Texttable

from .flags import decode_flags
from .utils import format_rate, to_hex32


def result_table(result, flags=None) -> str:
    table = Texttable(max_width=0)
    table.header(["Field", "Value"])
    table.set_cols_align(["l", "l"])
    table.set_cols_dtype(["t", "t"])
    table.set_deco(Texttable.HEADER)
    table.add_row(["Status", result.status.value])
    if flags is not None:
        table.add_row(["Requested", ", ".join(sorted(f.name for f in flags)) or "-"])
    if result.found:
        table.add_row(["Salt", to_hex32(result.salt)])
        table.add_row(["Address", result.checksum_address])
        granted = decode_flags(result.address)
        table.add_row(["Granted", ", ".join(sorted(f.name for f in granted)) or "-"])
        table.add_row(["Worker", result.worker])
    table.add_row(["Attempts", f"{result.attempts:,}"])
    table.add_row(["Elapsed", f"{result.elapsed:.2f}s"])
    table.add_row(["Rate", format_rate(result.attempts, result.elapsed)])
    return table.draw()

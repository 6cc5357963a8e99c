from hookminer.flags import HookFlag
from hookminer.report import result_table
from hookminer.scheduler import SearchResult, SearchStatus
from hookminer.utils import format_rate, log, to_hex32

ADDRESS = bytes(18) + (0x0800).to_bytes(2, "big")


class TestResultTable:
    def test_found(self):
        result = SearchResult(
            SearchStatus.FOUND, 2000, 2.0, salt=bytes(32), address=ADDRESS, worker=1
        )
        table = result_table(result, {HookFlag.BEFORE_ADD_LIQUIDITY})
        assert "found" in table
        assert result.checksum_address in table
        assert "BEFORE_ADD_LIQUIDITY" in table
        assert "2,000" in table
        assert "1,000/s" in table

    def test_cancelled(self):
        result = SearchResult(SearchStatus.CANCELLED, 0, 0.0)
        table = result_table(result)
        assert "cancelled" in table
        assert "n/a" in table
        assert "Salt" not in table


class TestUtils:
    def test_to_hex32(self):
        assert to_hex32(b"\x01\x02") == "0x0102"

    def test_format_rate(self):
        assert format_rate(10, 0) == "n/a"
        assert format_rate(3000, 1.5) == "2,000/s"

    def test_log_to_file(self, monkeypatch, tmp_path, capsys):
        log_file = tmp_path / "miner.log"
        monkeypatch.setenv("LOG_FILE", str(log_file))
        log("hello")
        log("plain", add_timestamp=False)
        assert capsys.readouterr().out == "hello\nplain\n"
        lines = log_file.read_text().splitlines()
        assert lines[0].endswith(" - hello")
        assert lines[1] == "plain"

"""Tests for the command-line interface."""

import csv

import pytest

from clmm_probe import cli
from clmm_probe.errors import ConfigError
from clmm_probe.models.types import SizeUnit
from clmm_probe.reporting.rows import CSV_HEADER
from tests.helpers.constants import BTC_WRAPPED, ORCA_SOL_USDC_POOL, SOL_BTC_POOL, SOL_USDC_POOL


@pytest.fixture
def patched_venues(monkeypatch, scenario_adapter):
    """Route the CLI to the scenario adapter instead of a live RPC."""
    requested: list[tuple[str, int]] = []

    def fake_get_adapter(dex, reader, tick_arrays=3):
        requested.append((dex, tick_arrays))
        return scenario_adapter

    monkeypatch.setattr(cli, "SolanaAccountReader", lambda rpc_url: object())
    monkeypatch.setattr(cli, "get_adapter", fake_get_adapter)
    return requested


class TestParser:
    """Tests for argument parsing and config building."""

    def test_probe_defaults(self):
        args = cli.build_parser().parse_args(["probe", "--pool", SOL_USDC_POOL])
        config = cli.config_from_args(args)

        assert config.dex == "orca"
        assert config.sizes == [100.0, 1000.0, 5000.0, 10000.0, 100000.0, 1000000.0]
        assert config.size_unit is None
        assert config.tick_arrays == 3
        assert config.csv_path is None

    def test_usd_alias(self):
        args = cli.build_parser().parse_args(
            ["probe", "--pool", SOL_USDC_POOL, "--size-unit", "usd", "--price-unit", "quote"]
        )
        config = cli.config_from_args(args)

        assert config.size_unit == SizeUnit.STABLE
        assert config.price_unit == SizeUnit.QUOTE

    def test_range_overrides_sizes(self):
        args = cli.build_parser().parse_args(
            ["probe", "--pool", SOL_USDC_POOL, "--sizes", "5", "--range", "10:30:10"]
        )
        assert cli.config_from_args(args).sizes == [10.0, 20.0, 30.0]

    def test_rpc_from_environment(self, monkeypatch):
        monkeypatch.setenv(cli.RPC_URL_ENV, "http://localhost:8899")
        args = cli.build_parser().parse_args(["probe", "--pool", SOL_USDC_POOL])
        assert args.rpc == "http://localhost:8899"

    def test_invalid_pool(self):
        args = cli.build_parser().parse_args(["probe", "--pool", "not-a-pubkey"])
        with pytest.raises(ConfigError):
            cli.config_from_args(args)

    def test_unknown_dex_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["probe", "--dex", "meteora", "--pool", SOL_USDC_POOL])

    def test_pool_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["probe"])


class TestMain:
    """Tests for cli.main exit codes and outputs."""

    def test_probe_success(self, patched_venues, capsys):
        code = cli.main(["probe", "--pool", SOL_USDC_POOL, "--sizes", "100,1000,10000"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Pool Summary" in out
        assert out.count("rt=8.0182bps") == 3
        assert patched_venues == [("orca", 3)]

    def test_probe_writes_csv(self, patched_venues, tmp_path, capsys):
        path = tmp_path / "out" / "probe.csv"

        code = cli.main(
            ["probe", "--pool", SOL_USDC_POOL, "--sizes", "100,1000", "--csv", str(path), "-q"]
        )

        assert code == 0
        assert capsys.readouterr().out == ""
        with path.open(newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == CSV_HEADER
        assert len(rows) == 3

    def test_oversized_amount_keeps_going(self, patched_venues, tmp_path, capsys):
        path = tmp_path / "probe.csv"

        code = cli.main(
            ["probe", "--pool", SOL_USDC_POOL, "--sizes", "100,1e80,1000", "--csv", str(path)]
        )

        out = capsys.readouterr().out
        assert code == 0
        assert "error:" in out
        assert "1 of 3 sizes failed" in out
        with path.open(newline="") as f:
            rows = list(csv.reader(f))
        assert len(rows) == 4
        assert rows[2][CSV_HEADER.index("roundtrip_bps")] == "NaN"

    def test_oracle_on_other_dex(self, patched_venues, capsys):
        cli.main(
            [
                "probe",
                "--dex",
                "raydium",
                "--pool",
                SOL_USDC_POOL,
                "--sizes",
                "100",
                "--oracle-dex",
                "orca",
                "--tick-arrays",
                "2",
            ]
        )
        assert patched_venues == [("raydium", 2), ("orca", 3)]

    def test_missing_pool_exit_code(self, patched_venues, capsys):
        code = cli.main(["probe", "--pool", SOL_BTC_POOL, "--sizes", "100"])

        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_empty_sizes_exit_code(self, patched_venues, capsys):
        code = cli.main(["probe", "--pool", SOL_USDC_POOL, "--sizes=-1,abc"])

        assert code == 1
        assert "size list is empty" in capsys.readouterr().err

    def test_bad_quote_mint_exit_code(self, patched_venues, capsys):
        code = cli.main(
            [
                "probe",
                "--pool",
                SOL_USDC_POOL,
                "--quote-mint",
                BTC_WRAPPED,
                "--oracle-pool",
                ORCA_SOL_USDC_POOL,
            ]
        )

        assert code == 1
        assert "not in pool" in capsys.readouterr().err

    def test_merge(self, tmp_path, capsys):
        (tmp_path / "a.csv").write_text("h\n1\n")

        code = cli.main(["merge", str(tmp_path)])

        assert code == 0
        assert "merged ->" in capsys.readouterr().out
        assert (tmp_path / "all.csv").read_text() == "h\n1\n"

    def test_merge_nothing(self, tmp_path, capsys):
        assert cli.main(["merge", str(tmp_path)]) == 0
        assert "no csv" in capsys.readouterr().out

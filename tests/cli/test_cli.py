"""Tests for the filtercalc command line."""
from __future__ import annotations

import json

import pytest

from filtercalc.cli import main


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: filtercalc" in capsys.readouterr().out


def test_bloom_table(capsys):
    assert main(["bloom", "--elements", "1M", "--rate", "1%"]) == 0
    out = capsys.readouterr().out
    assert "9,585,059 bits" in out


def test_bloom_json(capsys):
    assert main(["bloom", "-n", "1000000", "-p", "0.01", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "bloom"
    assert data["bit_array_size"] == 9_585_059
    assert data["num_hash_functions"] == 7


def test_cuckoo_json_with_options(capsys):
    argv = ["cuckoo", "-n", "1M", "-p", "1%", "-b", "4", "--exact-buckets", "--json"]
    assert main(argv) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["num_buckets"] == 263_158
    assert data["fingerprint_bits"] == 10


def test_cuckoo_memory_budget(capsys):
    assert main(["cuckoo", "-n", "1M", "--memory", "12582912", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["fingerprint_bits"] == 12


def test_compare_json(capsys):
    assert main(["compare", "-n", "1M", "-p", "0.01", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["bloom"]["bit_array_size"] == 9_585_059
    assert data["cuckoo"]["num_buckets"] == 262_144
    assert data["recommended"] == "bloom"


def test_compare_table(capsys):
    assert main(["compare", "-n", "1M", "-p", "1e-6"]) == 0
    assert "Recommended: Cuckoo filter" in capsys.readouterr().out


def test_missing_rate_and_memory(capsys):
    assert main(["bloom", "-n", "1000"]) == 2
    err = capsys.readouterr().err
    assert err.startswith("error:")
    assert "required" in err


def test_unsupported_bucket_size(capsys):
    assert main(["cuckoo", "-n", "1000", "-p", "0.01", "-b", "3"]) == 2
    assert "not supported" in capsys.readouterr().err


def test_budget_too_small(capsys):
    assert main(["cuckoo", "-n", "1M", "-m", "1Kb"]) == 2
    assert "too small" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["bloom", "-n", "1000", "-p", "1.5"],
    ["bloom", "-n", "0", "-p", "0.01"],
    ["bloom", "-n", "1000", "-m", "12 parsecs"],
    ["bloom", "-p", "0.01"],
])
def test_argument_errors_exit_2(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 2


def test_capacity_json(capsys):
    assert main(["capacity", "-p", "1%", "-m", "9585059", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "bloom"
    assert data["elements"] == 1_000_000
    assert data["parameters"]["bit_array_size"] == 9_585_059


def test_capacity_cuckoo_table(capsys):
    assert main(["capacity", "--kind", "cuckoo", "-p", "0.01", "-m", "10485760"]) == 0
    out = capsys.readouterr().out
    assert "Number of items in filter: 996,147" in out
    assert "Lower-bound capacity:" in out


def test_capacity_budget_too_small(capsys):
    assert main(["capacity", "-k", "cuckoo", "-p", "0.01", "-m", "39"]) == 2
    assert "cannot hold one element" in capsys.readouterr().err


def test_capacity_requires_rate_and_memory():
    with pytest.raises(SystemExit) as exc_info:
        main(["capacity", "-p", "0.01"])
    assert exc_info.value.code == 2


def test_subnormal_rate_does_not_crash(capsys):
    assert main(["compare", "-n", "1000", "-p", "1e-310"]) == 0
    assert "Recommended:" in capsys.readouterr().out


def test_huge_budget_returns_promptly(capsys):
    assert main(["cuckoo", "-n", "1", "-m", "1TB", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["fingerprint_bits"] == 64

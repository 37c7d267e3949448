"""
Test: Command-line resolver.

Tests:
1. Batch runs for known-only, series-unknown and parallel-unknown circuits
2. Retry loop fed from repeated --measured values
3. Exit status 1 for every typed failure
4. Interactive prompting
"""
import builtins

import pytest


def run_cli(capsys, *argv):
    from pyresist.cli import main

    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


class TestBatch:

    def test_known_circuit(self, capsys):
        code, out, _ = run_cli(capsys, "+10_20-", "--batch")

        assert code == 0
        assert "Req_known): 30.00 Ohm" in out
        assert "Voltage: (not available)" in out
        assert "Not enough data" in out

    def test_operating_point(self, capsys):
        code, out, _ = run_cli(capsys, "+10_20-", "--batch", "--current", "2")

        assert code == 0
        assert "Voltage: 60.00 V" in out
        assert "Current: 2.00 A" in out
        assert "Calculation completed." in out

    def test_series_unknown(self, capsys):
        code, out, _ = run_cli(capsys, "+10_x-", "--batch", "--measured", "35")

        assert code == 0
        assert "unknown resistor in series" in out
        assert "Rx: 25.00 Ohm" in out
        assert "Req with Rx = 35.00 Ohm" in out

    def test_parallel_unknown(self, capsys):
        code, out, _ = run_cli(
            capsys, "+10*x||20=*-", "--batch", "--measured", "20", "--voltage", "10",
        )

        assert code == 0
        assert "inside a parallel group" in out
        assert "Rx: 20.00 Ohm" in out
        assert "Current: 0.50 A" in out

    def test_retry_with_second_value(self, capsys):
        code, out, err = run_cli(
            capsys, "+10_x-", "--batch", "--measured", "5", "--measured", "35,0",
        )

        assert code == 0
        assert "Rx: 25.00 Ohm" in out

    def test_no_diagram(self, capsys):
        code, out, _ = run_cli(capsys, "+10*20||20=*-", "--batch", "--no-diagram")

        assert code == 0
        assert "===" not in out
        assert "Req_known): 20.00 Ohm" in out


class TestFailures:

    def test_retries_exhausted(self, capsys):
        code, _, err = run_cli(capsys, "+10_x-", "--batch", "--measured", "5")

        assert code == 1
        assert "Error: no valid value after 3 attempts" in err

    def test_bad_format(self, capsys):
        code, _, err = run_cli(capsys, "10_20", "--batch")

        assert code == 1
        assert "must start with '+'" in err

    def test_bad_number(self, capsys):
        code, _, err = run_cli(capsys, "+10.5.3-", "--batch")

        assert code == 1
        assert "10.5.3" in err

    def test_two_unknowns(self, capsys):
        code, out, err = run_cli(capsys, "+x_x-", "--batch")

        assert code == 1
        assert "Req_known): 0.00 Ohm" in out
        assert "2 unknown resistors" in err

    def test_batch_requires_notation(self, capsys):
        with pytest.raises(SystemExit):
            run_cli(capsys, "--batch")


def test_interactive(monkeypatch, capsys):
    """Everything missing from the command line is prompted for."""
    answers = iter(["+10_x-", "abc", "35", "-1", "7"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))

    code, out, _ = run_cli(capsys)

    assert code == 0
    assert "Valid example" in out
    assert "Rx: 25.00 Ohm" in out
    assert "Voltage: 7.00 V" in out
    assert "Current: 0.20 A" in out


def test_unreadable_current_is_not_known(monkeypatch, capsys):
    """Garbage typed for the current does not undo an already solved Rx."""
    answers = iter(["abc", "-1"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))

    code, out, _ = run_cli(capsys, "+10_x-", "--measured", "35")

    assert code == 0
    assert "Rx: 25.00 Ohm" in out
    assert "Voltage: (not available)" in out
    assert "Current: (not available)" in out
    assert "Not enough data" in out


def test_interactive_end_of_input(monkeypatch, capsys):
    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, "input", eof)

    code, _, err = run_cli(capsys)

    assert code == 1
    assert "could not read" in err

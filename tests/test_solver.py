"""
Test: Solving for the unknown resistor.

Tests:
1. Series and parallel inversion formulas
2. Physical validity checks
3. analyze() pipeline and mode selection
4. Bounded retry policy
5. Measurement parsing
"""
import pytest


class TestSeriesMode:

    def test_solve(self):
        from pyresist import solve_series

        assert solve_series(10.0, 35.0) == 25.0

    def test_rx_not_positive(self):
        from pyresist import solve_series, PhysicallyInvalidError

        with pytest.raises(PhysicallyInvalidError) as exc_info:
            solve_series(10.0, 8.0)
        assert exc_info.value.value == -2.0

        with pytest.raises(PhysicallyInvalidError):
            solve_series(10.0, 10.0)


class TestParallelMode:

    def test_solve(self):
        """R_par = 10, Rx = 10*20/(20-10) - 0 = 20."""
        from pyresist import solve_parallel, ParallelStructure

        rx = solve_parallel(ParallelStructure(s0=0.0, s3=0.0, su=0.0, sk=20.0), 10.0)
        assert abs(rx - 20.0) < 1e-12

    def test_solve_with_series_parts(self):
        """5 + ((2 + Rx) || 20) + 3 measured as 18 -> R_par = 10 -> Rx = 18."""
        from pyresist import solve_parallel, ParallelStructure

        rx = solve_parallel(ParallelStructure(s0=5.0, s3=3.0, su=2.0, sk=20.0), 18.0)
        assert abs(rx - 18.0) < 1e-12

    def test_parallel_part_not_positive(self):
        from pyresist import solve_parallel, ParallelStructure, PhysicallyInvalidError

        with pytest.raises(PhysicallyInvalidError) as exc_info:
            solve_parallel(ParallelStructure(10.0, 5.0, 0.0, 20.0), 12.0)
        assert exc_info.value.value == -3.0

    def test_known_branch_not_above_parallel_part(self):
        """Adding a branch can only lower the resistance below Sk."""
        from pyresist import solve_parallel, ParallelStructure, PhysicallyInvalidError

        with pytest.raises(PhysicallyInvalidError):
            solve_parallel(ParallelStructure(0.0, 0.0, 0.0, 20.0), 25.0)
        with pytest.raises(PhysicallyInvalidError):
            solve_parallel(ParallelStructure(0.0, 0.0, 0.0, 20.0), 20.0)

    def test_rx_not_positive(self):
        """Su already larger than the branch needs: Rx = 20 - 30 < 0."""
        from pyresist import solve_parallel, ParallelStructure, PhysicallyInvalidError

        with pytest.raises(PhysicallyInvalidError) as exc_info:
            solve_parallel(ParallelStructure(0.0, 0.0, 30.0, 20.0), 10.0)
        assert exc_info.value.value == -10.0


@pytest.mark.parametrize("measured", [0.0, -5.0, float("nan")])
def test_non_positive_measurement_rejected(measured):
    """Any Req_measured <= 0 fails whatever the topology."""
    from pyresist import (
        solve_series, solve_parallel, ParallelStructure, PhysicallyInvalidError,
    )

    with pytest.raises(PhysicallyInvalidError):
        solve_series(0.0, measured)
    with pytest.raises(PhysicallyInvalidError):
        solve_parallel(ParallelStructure(0.0, 0.0, 0.0, 20.0), measured)


class TestAnalyze:

    def test_series_unknown(self):
        from pyresist import analyze, solve_unknown

        analysis = analyze("+10_x-")

        assert analysis.req_known == 10.0
        assert analysis.unknown_count == 1
        assert analysis.structure is None
        assert analysis.mode == "series"

        solution = solve_unknown(analysis, 35.0)
        assert solution.rx == 25.0
        assert solution.mode == "series"
        assert solution.req_measured == 35.0

    def test_parallel_unknown(self):
        from pyresist import analyze, solve_unknown

        analysis = analyze("+10*x||20=*-")

        assert analysis.req_known == 30.0
        assert analysis.mode == "parallel"
        assert tuple(analysis.structure) == (10.0, 0.0, 0.0, 20.0)

        solution = solve_unknown(analysis, 20.0)
        assert abs(solution.rx - 20.0) < 1e-12
        assert solution.mode == "parallel"

    def test_single_branch_group_falls_back_to_series(self):
        from pyresist import analyze, solve_unknown

        analysis = analyze("+10*x*-")

        assert analysis.mode == "series"
        assert solve_unknown(analysis, 25.0).rx == 15.0

    def test_unclosed_branch_before_third_falls_back_to_series(self):
        """Extractor and evaluator agree that only x || 10 was collected."""
        from pyresist import analyze

        analysis = analyze("+*x||10||20=*-")

        assert analysis.req_known == 10.0
        assert analysis.structure is None
        assert analysis.mode == "series"

    def test_no_unknown(self):
        from pyresist import analyze, solve_unknown

        analysis = analyze("+10_20-")

        assert analysis.unknown_count == 0
        assert analysis.mode is None
        with pytest.raises(ValueError):
            solve_unknown(analysis, 30.0)

    def test_two_unknowns(self):
        from pyresist import analyze, UnsupportedTopologyError

        with pytest.raises(UnsupportedTopologyError):
            analyze("+x_x-")

    def test_stateless(self):
        """The same analysis can be solved repeatedly with fresh values."""
        from pyresist import analyze, solve_unknown, PhysicallyInvalidError

        analysis = analyze("+10_x-")

        with pytest.raises(PhysicallyInvalidError):
            solve_unknown(analysis, 5.0)
        assert solve_unknown(analysis, 40.0).rx == 30.0
        assert solve_unknown(analysis, 35.0).rx == 25.0


class TestRetries:

    def test_succeeds_on_last_attempt(self):
        from pyresist import analyze, solve_with_retries

        values = [-5.0, 5.0, 35.0]
        attempts = []

        def read(attempt):
            attempts.append(attempt)
            return values[attempt - 1]

        solution = solve_with_retries(analyze("+10_x-"), read)

        assert solution.rx == 25.0
        assert attempts == [1, 2, 3]

    def test_stops_after_first_success(self):
        from pyresist import analyze, solve_with_retries

        attempts = []

        def read(attempt):
            attempts.append(attempt)
            return 35.0

        solve_with_retries(analyze("+10_x-"), read)
        assert attempts == [1]

    def test_exhausted(self):
        from pyresist import (
            analyze, solve_with_retries, RetryExhaustedError, PhysicallyInvalidError,
        )

        with pytest.raises(RetryExhaustedError) as exc_info:
            solve_with_retries(analyze("+10_x-"), lambda attempt: 1.0)

        assert exc_info.value.attempts == 3
        assert isinstance(exc_info.value.last_error, PhysicallyInvalidError)

    def test_unreadable_input_counts_as_attempt(self):
        from pyresist import analyze, solve_with_retries, parse_measurement

        answers = ["abc", "", "35"]
        solution = solve_with_retries(
            analyze("+10_x-"), lambda attempt: parse_measurement(answers[attempt - 1])
        )
        assert solution.rx == 25.0

    def test_custom_attempt_limit(self):
        from pyresist import analyze, solve_with_retries, RetryExhaustedError

        with pytest.raises(RetryExhaustedError) as exc_info:
            solve_with_retries(analyze("+10_x-"), lambda attempt: 1.0, max_attempts=5)
        assert exc_info.value.attempts == 5


class TestParseMeasurement:

    @pytest.mark.parametrize("text,expected", [
        ("35", 35.0),
        (" 35 ", 35.0),
        ("10,5", 10.5),
        ("10.5", 10.5),
        ("1e3", 1000.0),
        ("-1", -1.0),
    ])
    def test_valid(self, text, expected):
        from pyresist import parse_measurement

        assert parse_measurement(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "10 Ohm", "1.2.3"])
    def test_invalid(self, text):
        from pyresist import parse_measurement, ParseError

        with pytest.raises(ParseError):
            parse_measurement(text)

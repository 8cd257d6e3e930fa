"""Tests for the analysis benchmark suite and its Rich report."""

from rich.console import Console

from clipkeep.analysis.benchmark import BenchmarkResult, BenchmarkSuite, render_results
from clipkeep.analysis.budget import GLOBAL_STATS
from clipkeep.config.schema import AnalysisConfig


class TestBenchmarkSuite:
    """Tests for BenchmarkSuite.run()."""

    def test_runs_all_scenarios(self) -> None:
        suite = BenchmarkSuite(AnalysisConfig(analysis_timeout_ms=60_000))
        results = suite.run()

        assert [r.name for r in results] == [
            "Small Content",
            "Medium Content",
            "Large Content",
            "Similarity Calculation",
            "App Detection",
        ]
        assert all(r.success for r in results)
        assert results[2].content_size == 500_000

    def test_uses_its_own_stats(self) -> None:
        before = GLOBAL_STATS.analysis_count
        suite = BenchmarkSuite(AnalysisConfig(analysis_timeout_ms=60_000))
        suite.run()

        assert suite.stats.analysis_count == 5
        assert GLOBAL_STATS.analysis_count == before

    def test_oversize_scenarios_fail(self) -> None:
        suite = BenchmarkSuite(
            AnalysisConfig(analysis_timeout_ms=60_000, max_content_size=20_000)
        )
        results = {r.name: r for r in suite.run()}

        assert results["Small Content"].success is True
        assert results["Large Content"].success is False
        assert "Content too large" in results["Large Content"].error_message
        assert suite.stats.analysis_count == 3


class TestBenchmarkResult:
    """Tests for BenchmarkResult bookkeeping."""

    def test_failure_then_success_clears_error(self) -> None:
        result = BenchmarkResult(name="x", content_size=1)
        result.record_failure(5.0, "boom")
        result.record_success(2.0)

        assert result.success is True
        assert result.error_message is None
        assert result.processing_time_ms == 2.0


class TestRenderResults:
    """Tests for render_results()."""

    def test_summary(self) -> None:
        ok = BenchmarkResult(name="Small Content", content_size=1_000)
        ok.record_success(12.0)
        failed = BenchmarkResult(name="Large Content", content_size=500_000)
        failed.record_failure(300.0, "Analysis timed out: exceeded 200ms budget")

        console = Console(record=True, width=160)
        render_results([ok, failed], AnalysisConfig(), console)
        output = console.export_text()

        assert "Analysis Benchmark Results" in output
        assert "Small Content" in output
        assert "Tests passed: 1/2" in output
        assert "Within time limit: 1/2" in output
        assert "Average time: 156.0ms" in output

    def test_empty_results(self) -> None:
        console = Console(record=True, width=160)
        render_results([], AnalysisConfig(), console)
        output = console.export_text()

        assert "Tests passed: 0/0" in output
        assert "Average time" not in output

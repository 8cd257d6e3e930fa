"""Timing benchmarks for the budgeted analysis, with a Rich report.

Example:
    suite = BenchmarkSuite(AnalysisConfig(analysis_timeout_ms=1000))
    results = suite.run()
    render_results(results, suite.config, Console())
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from rich.console import Console
from rich.table import Table

from clipkeep.analysis.analyzer import HtmlAnalyzer
from clipkeep.analysis.budget import AnalysisStats, PerformanceBudget
from clipkeep.analysis.features import detect_producer
from clipkeep.analysis.similarity import estimate_similarity
from clipkeep.config.schema import AnalysisConfig
from clipkeep.core.errors import AnalysisError


@dataclass
class BenchmarkResult:
    """Outcome of a single benchmark scenario."""

    name: str
    content_size: int
    processing_time_ms: float = 0.0
    success: bool = False
    error_message: str | None = None

    def record_success(self, processing_time_ms: float) -> None:
        self.processing_time_ms = processing_time_ms
        self.success = True
        self.error_message = None

    def record_failure(self, processing_time_ms: float, error: str) -> None:
        self.processing_time_ms = processing_time_ms
        self.success = False
        self.error_message = error


class BenchmarkSuite:
    """Runs fixed analysis scenarios and times them against the budget."""

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self.config = config or AnalysisConfig()
        # Own counters so benchmarks don't skew the process-wide stats
        self.stats = AnalysisStats()
        self._analyzer = HtmlAnalyzer(self.config, stats=self.stats)

    def run(self) -> list[BenchmarkResult]:
        """Run all scenarios in order."""
        return [
            self._similarity_case("Small Content", "a" * 1_000, "test"),
            self._similarity_case("Medium Content", "a" * 50_000, "test"),
            self._similarity_case("Large Content", "a" * 500_000, "test"),
            self._similarity_case(
                "Similarity Calculation",
                f"<div>{'test content ' * 1000}</div>",
                "test content " * 1000,
            ),
            self._timed(
                "App Detection",
                '<div data-testid="conversation-turn" class="markdown prose w-full">'
                f"{'content ' * 500}</div>",
                lambda html, budget: detect_producer(html.lower(), budget),
            ),
        ]

    def _similarity_case(self, name: str, html: str, text: str) -> BenchmarkResult:
        return self._timed(name, html, lambda h, budget: estimate_similarity(h, text, budget))

    def _timed(
        self,
        name: str,
        content: str,
        fn: Callable[[str, PerformanceBudget], object],
    ) -> BenchmarkResult:
        result = BenchmarkResult(name=name, content_size=len(content))
        start = time.perf_counter()
        try:
            self._analyzer.measure(content, fn)
        except AnalysisError as e:
            result.record_failure((time.perf_counter() - start) * 1000.0, e.message)
        else:
            result.record_success((time.perf_counter() - start) * 1000.0)
        return result


def render_results(
    results: list[BenchmarkResult],
    config: AnalysisConfig,
    console: Console,
) -> None:
    """Print a benchmark table and summary."""
    budget_ms = config.analysis_timeout_ms
    table = Table(title="Analysis Benchmark Results")
    table.add_column("Status")
    table.add_column("Scenario")
    table.add_column("Size (chars)", justify="right")
    table.add_column("Time (ms)", justify="right")
    table.add_column("Budget")
    table.add_column("Error", overflow="fold")

    for r in results:
        table.add_row(
            "[green]PASS[/]" if r.success else "[red]FAIL[/]",
            r.name,
            f"{r.content_size:,}",
            f"{r.processing_time_ms:.1f}",
            "[green]ok[/]" if r.processing_time_ms <= budget_ms else "[red]over[/]",
            r.error_message or "",
        )

    console.print(f"Target: analysis within {budget_ms}ms, max content {config.max_content_size:,} bytes")
    console.print(table)

    total = len(results)
    passed = sum(1 for r in results if r.success)
    within = sum(1 for r in results if r.processing_time_ms <= budget_ms)
    console.print(f"Tests passed: {passed}/{total}")
    console.print(f"Within time limit: {within}/{total}")
    if total:
        average = sum(r.processing_time_ms for r in results) / total
        console.print(f"Average time: {average:.1f}ms")

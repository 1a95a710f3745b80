"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for benchmark results.

    Compares solve pipelines on time and on how often they needed search,
    and shows how sparse the generated puzzles came out.
    """

    # Color palette for solvers
    COLORS = {
        "Deduction": "#2ecc71",        # Green
        "Full deduction": "#3498db",   # Blue
        "Backtracking": "#e74c3c",     # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_clue_distribution(),
            self.plot_time_by_clues(),
            self.plot_backtracking_rate(),
        ]

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self._algorithms()
        avg_times = []
        colors = []
        for algo in algorithms:
            times = [r.time_seconds for r in self.results if r.algorithm == algo]
            avg_times.append(np.mean(times))
            colors.append(self.COLORS.get(algo, "#95a5a6"))

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        for bar, time in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{time:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Solver', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def plot_clue_distribution(self) -> str:
        """Histogram of clue counts, one entry per puzzle."""
        fig, ax = plt.subplots(figsize=(10, 6))

        clues = {r.puzzle_id: r.clues for r in self.results}
        sns.histplot(list(clues.values()), discrete=True, ax=ax, color="#9b59b6")

        ax.set_xlabel('Filled cells', fontsize=12)
        ax.set_ylabel('Puzzles', fontsize=12)
        ax.set_title('Clue Count of Generated Puzzles', fontsize=14, fontweight='bold')

        return self._save("clue_distribution.png")

    def plot_time_by_clues(self) -> str:
        """Scatter of solve time against clue count, per solver."""
        fig, ax = plt.subplots(figsize=(10, 6))

        for algo in self._algorithms():
            algo_results = [r for r in self.results if r.algorithm == algo]
            sns.scatterplot(
                x=[r.clues for r in algo_results],
                y=[r.time_seconds for r in algo_results],
                label=algo,
                color=self.COLORS.get(algo, "#95a5a6"),
                ax=ax,
            )

        ax.set_xlabel('Filled cells', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time by Clue Count', fontsize=14, fontweight='bold')
        ax.legend(title='Solver')

        return self._save("time_by_clues.png")

    def plot_backtracking_rate(self) -> str:
        """Bar chart of the share of puzzles each solver had to search on."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self._algorithms()
        rates = []
        for algo in algorithms:
            algo_results = [r for r in self.results if r.algorithm == algo]
            rates.append(100 * np.mean([r.backtracked for r in algo_results]))

        ax.bar(algorithms, rates,
               color=[self.COLORS.get(a, "#95a5a6") for a in algorithms],
               edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Puzzles needing search (%)', fontsize=12)
        ax.set_title('Backtracking Fallback Rate', fontsize=14, fontweight='bold')
        ax.set_ylim(0, 105)

        return self._save("backtracking_rate.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Solver | Accuracy | Avg Time | Avg Sweeps | Searched |",
            "|--------|----------|----------|------------|----------|"
        ]

        for algo in self._algorithms():
            algo_results = [r for r in self.results if r.algorithm == algo]

            solved = sum(1 for r in algo_results if r.solved)
            accuracy = (solved / len(algo_results)) * 100 if algo_results else 0
            avg_time = np.mean([r.time_seconds for r in algo_results])
            avg_sweeps = np.mean([r.sweeps for r in algo_results])
            searched = sum(1 for r in algo_results if r.backtracked)

            lines.append(
                f"| {algo} | {accuracy:.1f}% | {avg_time:.4f}s | {avg_sweeps:.1f} | {searched} |"
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))

        return path

"""Visualization utilities for generation benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for generation benchmark results.
    """
    
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
    
    def generate_all(self) -> List[str]:
        """
        Generate all charts.
        
        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_by_size(),
            self.plot_attempts_distribution(),
        ]
    
    def plot_time_by_size(self) -> str:
        """Create bar chart of average generation time per board size."""
        fig, ax = plt.subplots(figsize=(10, 6))
        
        sizes = sorted(set(r.size for r in self.results))
        avg_times = [np.mean([r.time_seconds for r in self.results if r.size == s]) for s in sizes]
        labels = [f"{s}x{s}" for s in sizes]
        
        bars = ax.bar(labels, avg_times, edgecolor='black', linewidth=0.5)
        
        for bar, t in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{t:.3f}s',
                       xy=(bar.get_x() + bar.get_width() / 2, height),
                       xytext=(0, 3),
                       textcoords="offset points",
                       ha='center', va='bottom', fontsize=10)
        
        ax.set_xlabel('Board Size', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Generation Time by Board Size', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)
        
        plt.tight_layout()
        path = os.path.join(self.output_dir, "time_by_size.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        
        return path
    
    def plot_attempts_distribution(self) -> str:
        """Create box plot of partitions needed to reach a unique puzzle."""
        fig, ax = plt.subplots(figsize=(10, 6))
        
        sizes = [r.size for r in self.results]
        attempts = [r.uniqueness_attempts for r in self.results]
        
        sns.boxplot(x=sizes, y=attempts, ax=ax)
        sns.stripplot(x=sizes, y=attempts, ax=ax, color='black', alpha=0.4, size=3)
        
        ax.set_xlabel('Board Size', fontsize=12)
        ax.set_ylabel('Partitions Tried', fontsize=12)
        ax.set_title('Partitions Needed for a Unique Puzzle', fontsize=14, fontweight='bold')
        
        plt.tight_layout()
        path = os.path.join(self.output_dir, "attempts_distribution.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        
        return path

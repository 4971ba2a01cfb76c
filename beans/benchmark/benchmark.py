"""Benchmarking framework for Beans puzzle generation."""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Dict, Any, Optional
import json
import os

from tqdm import tqdm

from ..core.board import PuzzleBoard
from ..generator import PuzzleGenerator


@dataclass
class BenchmarkResult:
    """Results from generating a single puzzle."""
    puzzle_id: int
    size: int
    time_seconds: float
    solution_attempts: int
    partition_attempts: int
    uniqueness_attempts: int
    disconnected_partitions: int
    stalls: int
    status: str
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "size": self.size,
            "time_seconds": self.time_seconds,
            "solution_attempts": self.solution_attempts,
            "partition_attempts": self.partition_attempts,
            "uniqueness_attempts": self.uniqueness_attempts,
            "disconnected_partitions": self.disconnected_partitions,
            "stalls": self.stalls,
            "status": self.status,
        }


class GenerationBenchmark:
    """
    Measures how quickly the generator converges for each board size.
    
    Generates puzzles per size and records timing and retry counts.
    """
    
    def __init__(
        self,
        sizes: Optional[List[int]] = None,
        puzzles_per_size: int = 10,
        seed: Optional[int] = None,
        balance_regions: bool = False
    ):
        """
        Initialize the benchmark.
        
        Args:
            sizes: Board sizes to test (default: 6, 7, 8).
            puzzles_per_size: Number of puzzles to generate per size.
            seed: Random seed for reproducibility.
            balance_regions: Pass-through to the generator.
        """
        self.sizes = sizes or [6, 7, 8]
        self.puzzles_per_size = puzzles_per_size
        self.seed = seed
        self.balance_regions = balance_regions
        
        self.results: List[BenchmarkResult] = []
        self.puzzles: Dict[int, List[PuzzleBoard]] = {}
    
    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.
        
        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        self.puzzles = {}
        
        pbar = tqdm(total=len(self.sizes) * self.puzzles_per_size,
                    desc="Generating", disable=not show_progress)
        
        for size in self.sizes:
            seed = None if self.seed is None else self.seed + size
            generator = PuzzleGenerator(size=size, seed=seed,
                                        balance_regions=self.balance_regions)
            self.puzzles[size] = []
            
            for puzzle_id in range(self.puzzles_per_size):
                board, stats = generator.generate_with_stats()
                self.puzzles[size].append(board)
                self.results.append(BenchmarkResult(
                    puzzle_id=puzzle_id,
                    size=size,
                    time_seconds=stats.time_seconds,
                    solution_attempts=stats.solution_attempts,
                    partition_attempts=stats.partition_attempts,
                    uniqueness_attempts=stats.uniqueness_attempts,
                    disconnected_partitions=stats.disconnected_partitions,
                    stalls=stats.stalls,
                    status=stats.status.value,
                ))
                pbar.update(1)
        
        pbar.close()
        return self.results
    
    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.results),
            "sizes": list(self.sizes),
            "results_by_size": {}
        }
        
        for size in self.sizes:
            size_results = [r for r in self.results if r.size == size]
            if not size_results:
                continue
            
            times = [r.time_seconds for r in size_results]
            attempts = [r.uniqueness_attempts for r in size_results]
            unique = [r for r in size_results if r.status == "unique"]
            
            summary["results_by_size"][str(size)] = {
                "unique_rate": len(unique) / len(size_results) * 100,
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "avg_uniqueness_attempts": sum(attempts) / len(attempts),
                "max_uniqueness_attempts": max(attempts),
                "disconnected_partitions": sum(r.disconnected_partitions for r in size_results),
                "stalls": sum(r.stalls for r in size_results),
                "degraded": len(size_results) - len(unique),
                "total_tested": len(size_results)
            }
        
        return summary
    
    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)
        
        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)
        
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)
        
        puzzles_dir = os.path.join(output_dir, "puzzles")
        for size, puzzles in self.puzzles.items():
            size_dir = os.path.join(puzzles_dir, f"{size}x{size}")
            PuzzleGenerator.save_to_folder(puzzles, size_dir, prefix=f"puzzle_{size}")

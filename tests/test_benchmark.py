"""Unit tests for the generation benchmark."""

import json

import pytest
from beans.benchmark import GenerationBenchmark


class TestGenerationBenchmark:
    
    def test_run_collects_results(self):
        benchmark = GenerationBenchmark(sizes=[4, 5], puzzles_per_size=2, seed=1)
        results = benchmark.run(show_progress=False)
        
        assert len(results) == 4
        assert {r.size for r in results} == {4, 5}
        assert all(r.uniqueness_attempts >= 1 for r in results)
        assert len(benchmark.puzzles[5]) == 2
    
    def test_summary(self):
        benchmark = GenerationBenchmark(sizes=[5], puzzles_per_size=3, seed=2)
        benchmark.run(show_progress=False)
        summary = benchmark.get_summary()
        
        assert summary["total_puzzles"] == 3
        stats = summary["results_by_size"]["5"]
        assert stats["total_tested"] == 3
        assert 0 <= stats["unique_rate"] <= 100
        assert stats["avg_uniqueness_attempts"] >= 1
    
    def test_save_results(self, tmp_path):
        benchmark = GenerationBenchmark(sizes=[4], puzzles_per_size=2, seed=3)
        benchmark.run(show_progress=False)
        benchmark.save_results(str(tmp_path))
        
        with open(tmp_path / "benchmark_results.json") as f:
            data = json.load(f)
        assert len(data) == 2
        assert (tmp_path / "benchmark_summary.json").exists()
        assert (tmp_path / "puzzles" / "4x4" / "puzzle_4_1.txt").exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

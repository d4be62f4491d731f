"""
Profiling script for PyRBTree performance analysis.

This script profiles insert, lookup and delete workloads on the red-black
tree and times the same workloads on sortedcontainers.SortedList.
"""

import cProfile
import pstats
import io
from pstats import SortKey
import time
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
from sortedcontainers import SortedList
from src.pyrbtree.rbtree import RBTree


def create_keys(n_keys, ordered=False):
    """Create n distinct integer keys, shuffled unless ordered is set."""
    if ordered:
        return list(range(n_keys))
    np.random.seed(42)
    return [int(k) for k in np.random.permutation(n_keys)]


def run_tree(keys):
    """Insert every key, probe around each one, then delete them all."""
    tree = RBTree()
    for key in keys:
        tree.insert(key)
    for key in keys:
        tree.find_ge(key - 1)
        tree.find_le(key + 1)
    it = tree.begin()
    while not it.is_end():
        it = it.next()
    for key in keys:
        tree.delete_with_key(key)


def run_sorted_list(keys):
    """Same workload as run_tree on a SortedList."""
    data = SortedList()
    for key in keys:
        data.add(key)
    for key in keys:
        data.bisect_left(key - 1)
        data.bisect_right(key + 1)
    for _ in data:
        pass
    for key in keys:
        data.remove(key)


def profile_sequential():
    """Profile ascending inserts (10000 keys)."""
    run_tree(create_keys(10000, ordered=True))


def profile_random():
    """Profile shuffled inserts (10000 keys)."""
    run_tree(create_keys(10000))


def profile_churn():
    """Profile interleaved inserts and deletes on a small key space."""
    np.random.seed(7)
    ops = np.random.randint(0, 2, size=50000)
    keys = np.random.randint(0, 256, size=50000)
    tree = RBTree()
    for op, key in zip(ops, keys):
        if op:
            tree.insert(int(key))
        else:
            tree.delete_with_key(int(key))


def benchmark_scenario(name, func):
    """Benchmark a scenario and print timing."""
    print(f"\n{'='*60}")
    print(f"Profiling: {name}")
    print('='*60)

    # Create profiler
    profiler = cProfile.Profile()

    # Run with profiling
    start_time = time.time()
    profiler.enable()
    func()
    profiler.disable()
    elapsed = time.time() - start_time

    print(f"\nTotal time: {elapsed:.3f}s")

    # Print stats
    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(SortKey.CUMULATIVE)
    ps.print_stats(20)  # Top 20 functions

    print("\nTop 20 functions by cumulative time:")
    print(s.getvalue())

    return profiler


def compare_with_sorted_list(n_keys=10000):
    """Time the random workload on both containers without profiling."""
    keys = create_keys(n_keys)
    for name, func in (("RBTree", run_tree), ("SortedList", run_sorted_list)):
        start_time = time.time()
        func(keys)
        print(f"{name:>12}: {time.time() - start_time:.3f}s")


def main():
    """Run all profiling scenarios."""
    print("PyRBTree Performance Profiling")
    print("=" * 60)

    scenarios = [
        ("Sequential Inserts (10000 keys)", profile_sequential),
        ("Random Inserts (10000 keys)", profile_random),
        ("Insert/Delete Churn (50000 ops, 256 keys)", profile_churn),
    ]

    profilers = {}
    for name, func in scenarios:
        profilers[name] = benchmark_scenario(name, func)

    print("\n" + "="*60)
    print("RBTree vs SortedList (10000 random keys)")
    print("="*60)
    compare_with_sorted_list()

    # Save detailed profiles
    print("\n" + "="*60)
    print("Saving detailed profiles...")
    print("="*60)

    for name, profiler in profilers.items():
        filename = f"profile_{name.lower().replace(' ', '_').replace('(', '').replace(')', '').replace(',', '').replace('/', '_')}.prof"
        profiler.dump_stats(filename)
        print(f"Saved: {filename}")

    print("\nTo view detailed profile, use:")
    print("  python -m pstats <profile_file>")
    print("  then type 'stats' or 'sort cumulative' and 'stats 50'")


if __name__ == "__main__":
    main()

#!/usr/bin/env python
# FieldScope - Suggestion Benchmark
# =================================
# Measures similarity and suggestion latency
"""
Suggestion Engine Benchmark

Checks latency against the targets:
1. Single similarity comparison: < 0.1ms
2. Single suggestion call: < 1ms
3. Batch of mixed queries across entity types

Usage:
    python scripts/benchmark_suggestions.py
    python scripts/benchmark_suggestions.py --iterations 5000
    python scripts/benchmark_suggestions.py --json
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Tuple

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fieldscope.suggestions import SuggestionEngine, similarity

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SIMILARITY_TARGET_MS = 0.1
SUGGESTION_TARGET_MS = 1.0

SIMILARITY_PAIRS: List[Tuple[str, str]] = [
    ("status", "stat"),
    ("assignee", "assigne"),
    ("description", "desc"),
    ("priority", "pririty"),
    ("project", "prject"),
]

SUGGESTION_QUERIES: List[Tuple[str, str]] = [
    ("issue", "stat"),
    ("issue", "assign"),
    ("issue", "desc"),
    ("issue", "xyz"),
    ("project", "key"),
    ("user", "name"),
    ("agile", "sprnt"),
]

BATCH_QUERIES = [
    "stat", "assign", "desc", "prio", "proj", "user", "name", "key",
    "summary", "reporter", "created", "updated", "resolution", "labels",
]


def _time_ms(func, iterations: int) -> float:
    """Average milliseconds per call over iterations."""
    start = time.perf_counter()
    for _ in range(iterations):
        func()
    return (time.perf_counter() - start) * 1000 / iterations


def benchmark_similarity(iterations: int) -> Dict[str, Any]:
    timings = {}
    for a, b in SIMILARITY_PAIRS:
        timings[f"{a}/{b}"] = _time_ms(lambda: similarity(a, b), iterations)
        logger.info(f'"{a}" vs "{b}" -> {similarity(a, b):.3f} ({timings[f"{a}/{b}"]:.4f}ms per call)')

    worst = max(timings.values())
    return {
        "timings_ms": timings,
        "max_ms": worst,
        "target_ms": SIMILARITY_TARGET_MS,
        "passed": worst < SIMILARITY_TARGET_MS,
    }


def benchmark_suggestions(engine: SuggestionEngine, iterations: int) -> Dict[str, Any]:
    timings = {}
    for entity_type, query in SUGGESTION_QUERIES:
        key = f"{entity_type}:{query}"
        timings[key] = _time_ms(lambda: engine.suggest(entity_type, query, 5), iterations)
        top = engine.suggest(entity_type, query, 3)
        logger.info(f"{key} -> {', '.join(top) or '(none)'} ({timings[key]:.4f}ms per call)")

    worst = max(timings.values())
    return {
        "timings_ms": timings,
        "max_ms": worst,
        "target_ms": SUGGESTION_TARGET_MS,
        "passed": worst < SUGGESTION_TARGET_MS,
    }


def benchmark_batch(engine: SuggestionEngine, size: int) -> Dict[str, Any]:
    entity_types = ["issue", "project", "user", "agile"]
    start = time.perf_counter()
    for i in range(size):
        engine.suggest(entity_types[i % len(entity_types)], BATCH_QUERIES[i % len(BATCH_QUERIES)], 5)
    total_ms = (time.perf_counter() - start) * 1000

    logger.info(f"Batch of {size} queries: {total_ms:.2f}ms total, {total_ms / size:.4f}ms average")
    return {
        "queries": size,
        "total_ms": total_ms,
        "avg_ms": total_ms / size,
        "passed": total_ms / size < SUGGESTION_TARGET_MS,
    }


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="FieldScope: suggestion engine benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/benchmark_suggestions.py                    # Default run
  python scripts/benchmark_suggestions.py --iterations 5000  # More samples
  python scripts/benchmark_suggestions.py --json             # Machine-readable output
        """
    )

    parser.add_argument(
        "--iterations",
        type=int,
        default=1000,
        help="Calls per measured operation"
    )

    parser.add_argument(
        "--batch-size",
        type=int,
        default=100,
        help="Queries in the mixed batch"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.iterations < 1 or args.batch_size < 1:
        parser.error("--iterations and --batch-size must be positive")

    engine = SuggestionEngine()
    results = {
        "similarity": benchmark_similarity(args.iterations),
        "suggestions": benchmark_suggestions(engine, args.iterations),
        "batch": benchmark_batch(engine, args.batch_size),
    }

    passed = all(section["passed"] for section in results.values())

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        for name, section in results.items():
            logger.info(f"{name}: {'PASS' if section['passed'] else 'FAIL'}")

    sys.exit(0 if passed else 1)


if __name__ == "__main__":
    main()

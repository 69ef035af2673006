#!/usr/bin/env python3
"""Benchmark script for reachcheck performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import tempfile
import time
from pathlib import Path

FILE_TEMPLATE = """\
import {{ merge, clone }} from 'lodash';
import * as R from 'ramda';
const {{ format }} = require('date-fns');
export {{ helper{n} }} from './helpers/helper{n}';

export function run{n}(input) {{
  const copy = clone(input);
  return R.map((x) => format(merge(copy, x), 'yyyy'), input);
}}
"""


def benchmark_import_time() -> float:
    """Measure import time of reachcheck package."""
    start = time.perf_counter()
    import reachcheck  # noqa: F401

    return time.perf_counter() - start


def write_synthetic_project(root: Path, files: int) -> None:
    """Create a project with files entry modules and one helper each."""
    (root / "package.json").write_text(json.dumps({"name": "bench", "version": "1.0.0"}))
    (root / "src" / "helpers").mkdir(parents=True)
    for n in range(files):
        (root / "src" / f"module{n}.js").write_text(FILE_TEMPLATE.format(n=n))
        (root / "src" / "helpers" / f"helper{n}.js").write_text(
            f"export {{ debounce as helper{n} }} from 'lodash';\n"
        )


def benchmark_analysis(root: Path, workers: int, cached: bool) -> float:
    """Measure one full analysis run; cached runs are measured warm."""
    from reachcheck import AnalysisConfig, Component, ParseCache, ReachabilityAnalyzer

    components = [Component(name=name, version="0.0.0") for name in ("lodash", "ramda", "date-fns")]
    analyzer = ReachabilityAnalyzer(
        AnalysisConfig(workers=workers),
        cache=ParseCache() if cached else None,
    )
    if cached:
        analyzer.analyze(root, components)

    start = time.perf_counter()
    analyzer.analyze(root, components)
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run reachcheck benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    parser.add_argument(
        "--files",
        type=int,
        default=200,
        help="Number of synthetic entry modules",
    )
    args = parser.parse_args()

    results = []

    # Import time
    import_time = benchmark_import_time()
    results.append(
        {
            "name": "Import Time",
            "unit": "seconds",
            "value": import_time,
        }
    )

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        write_synthetic_project(root, args.files)

        for label, workers, cached in (
            ("Sequential", 1, False),
            ("4 Workers", 4, False),
            ("Warm Cache", 1, True),
        ):
            results.append(
                {
                    "name": f"Analysis {label} ({args.files * 2} files)",
                    "unit": "seconds",
                    "value": benchmark_analysis(root, workers, cached),
                }
            )

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()

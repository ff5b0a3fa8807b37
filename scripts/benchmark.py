#!/usr/bin/env python3
"""Benchmark script for dinavigator performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import tempfile
import time
from pathlib import Path

SERVICES = 2000


def _program(count: int) -> str:
    lines = ["var builder = WebApplication.CreateBuilder(args);"]
    lines.extend(
        f"builder.Services.AddScoped<IService{i}, Service{i}>();" for i in range(count)
    )
    return "\n".join(lines) + "\n"


def _consumer(index: int) -> str:
    return (
        f"public class Consumer{index}\n"
        "{\n"
        f"    public Consumer{index}(IService{index} service, IService{index + 1} next)\n"
        "    {\n"
        "    }\n"
        "}\n"
    )


def benchmark_import_time() -> float:
    """Measure import time of dinavigator package."""
    start = time.perf_counter()
    import dinavigator  # noqa: F401

    return time.perf_counter() - start


def benchmark_domain_types() -> float:
    """Measure creation time of domain types."""
    from dinavigator.domain.model.enums import InjectionKind, Lifetime
    from dinavigator.domain.model.injection_site import InjectionSite
    from dinavigator.domain.model.registration import Registration

    start = time.perf_counter()
    for _ in range(10000):
        Registration(
            id="Program.cs-1",
            lifetime=Lifetime.SCOPED,
            service_type="IClock",
            implementation_type="SystemClock",
            file_path="Program.cs",
            line_number=1,
        )
        InjectionSite(
            file_path="Orders.cs",
            line_number=3,
            class_name="Orders",
            member_name="constructor",
            kind=InjectionKind.CONSTRUCTOR,
            service_type="IClock",
        )
    return time.perf_counter() - start


def benchmark_extraction() -> float:
    """Measure registration extraction from one large startup file."""
    from dinavigator.application.extraction import extract_registrations
    from dinavigator.application.patterns import DEFAULT_CATALOGS

    text = _program(SERVICES)
    start = time.perf_counter()
    extract_registrations("Program.cs", text, DEFAULT_CATALOGS)
    return time.perf_counter() - start


def benchmark_analysis() -> float:
    """Measure a full analysis of a generated project on disk."""
    from dinavigator import analyze_project

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        (root / "Program.cs").write_text(_program(SERVICES), encoding="utf-8")
        for i in range(SERVICES // 10):
            (root / f"Consumer{i}.cs").write_text(_consumer(i), encoding="utf-8")

        start = time.perf_counter()
        analyze_project(root)
        return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run dinavigator benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    args = parser.parse_args()

    results = [
        {"name": "Import Time", "unit": "seconds", "value": benchmark_import_time()},
        {
            "name": "Domain Types (10k iterations)",
            "unit": "seconds",
            "value": benchmark_domain_types(),
        },
        {
            "name": f"Registration Extraction ({SERVICES} lines)",
            "unit": "seconds",
            "value": benchmark_extraction(),
        },
        {
            "name": f"Project Analysis ({SERVICES} services)",
            "unit": "seconds",
            "value": benchmark_analysis(),
        },
    ]

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()

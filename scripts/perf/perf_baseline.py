"""Deterministic local performance baseline runner.

This script benchmarks the text extractor on synthetic HTML documents of
increasing size, plus two adversarial shapes (unterminated tag openers and a
long script body). It prints stable key=value lines for easy diffing and also
writes the same output to .perf/extract-baseline.txt.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from statistics import median
from time import perf_counter

from vulpes.core.text_extract import extract_text

DOCUMENT_SIZES: tuple[int, ...] = (100, 1_000, 10_000)
ADVERSARIAL_BYTES = 1_000_000
REPEATS = 5
EVIDENCE_PATH = Path(".perf/extract-baseline.txt")


def _build_section(index: int) -> str:
    return (
        f"<section><h2>Section {index:05d}</h2>"
        f"<p>Synthetic paragraph {index} with <b>bold</b>, <a href='/x/{index}'>a link</a>"
        " &amp; some &nbsp; entities &#x2014; plus   irregular\n\n  whitespace.</p>"
        "<script>var x = 1 < 2 && 3 > 2;</script>"
        "<ul><li>one</li><li>two</li></ul></section>\n"
    )


def _build_document(section_count: int) -> bytes:
    head = "<html><head><title>Perf</title><style>p { color: red; }</style></head><body>"
    sections = "".join(_build_section(index) for index in range(section_count))
    return (head + sections + "</body></html>").encode("utf-8")


def _measure_ms(function: Callable[[], object], repeats: int = REPEATS) -> float:
    function()
    samples_ms: list[float] = []
    for _ in range(repeats):
        start = perf_counter()
        function()
        samples_ms.append((perf_counter() - start) * 1000.0)
    return median(samples_ms)


def _collect_metrics() -> list[tuple[str, float]]:
    metrics: list[tuple[str, float]] = []
    for size in DOCUMENT_SIZES:
        document = _build_document(size)
        metrics.append((f"extract_{size}_sections_ms", _measure_ms(lambda: extract_text(document))))

    lone_openers = b"<" * ADVERSARIAL_BYTES
    metrics.append(("extract_lone_openers_ms", _measure_ms(lambda: extract_text(lone_openers))))

    long_script = b"<script>" + b"a<b;" * (ADVERSARIAL_BYTES // 4) + b"</script>tail"
    metrics.append(("extract_long_script_ms", _measure_ms(lambda: extract_text(long_script))))
    return metrics


def _render_lines(metrics: list[tuple[str, float]]) -> list[str]:
    return [f"{key}={value:.3f}" for key, value in metrics]


def _write_evidence(lines: list[str]) -> None:
    EVIDENCE_PATH.parent.mkdir(parents=True, exist_ok=True)
    EVIDENCE_PATH.write_text("\n".join(lines) + "\n", encoding="utf-8")


def main() -> int:
    lines = _render_lines(_collect_metrics())
    for line in lines:
        print(line)
    _write_evidence(lines)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""
Benchmark the progressive scanline renderer.
Times complete (never superseded) renders for each color scheme over a
list of resolutions and writes the results as CSV. Each scheme renders
with the algorithm it colors.

Usage examples:
  python -m benchmarking.benchmark --res 320x240,800x600 --steps 200 --runs 3

  python -m benchmarking.benchmark --schemes hsv1,grayscale2 --samples 4
"""

import csv
import time
import argparse
import logging
import platform
from typing import List, Sequence, Tuple

import numpy as np

from coloring.base import parse_color_scheme
from fractals.base import RenderSettings, Viewport
from fractals.settings_validator import SCHEME_ALGORITHMS
from rendering.buffer import PixelBuffer
from rendering.progress import metric_units
from rendering.progressive import ProgressiveRender
from rendering.scheduler import run_to_completion
from rendering.session import RenderSession, SessionCounter
from utils.coords import compute_ranges
from utils.enums import ColorScheme

logger = logging.getLogger(__name__)

DEFAULT_RESOLUTIONS = [(320, 240), (800, 600)]

# --- Helpers -----------------------------------------------------------------

def parse_resolution_list(text: str) -> List[Tuple[int, int]]:
    """
    "800x600,1280x720" -> [(800, 600), (1280, 720)]; empty gives the defaults.
    """
    sizes = []
    for item in (text or "").lower().split(","):
        item = item.strip()
        if item:
            w, _, h = item.partition("x")
            sizes.append((int(w), int(h)))
    return sizes or list(DEFAULT_RESOLUTIONS)

def parse_scheme_list(schemes: str) -> List[ColorScheme]:
    return [parse_color_scheme(t) for t in schemes.split(",") if t.strip()]

# --- Benchmark core ----------------------------------------------------------

def do_render(settings: RenderSettings, width: int, height: int,
              rng: np.random.Generator) -> float:
    """
    Perform a single render of the default viewport and return its time.
    """
    vp = Viewport()
    counter = SessionCounter()
    session = RenderSession(id=counter.advance(), viewport=vp,
                            ranges=compute_ranges(vp.look_at, vp.zoom, width, height),
                            settings=settings, width=width, height=height)
    render = ProgressiveRender(session, PixelBuffer(width, height), counter, rng=rng)
    t0 = time.perf_counter()
    run_to_completion(render)
    return time.perf_counter() - t0

def benchmark_combo(scheme: ColorScheme, max_steps: int, samples: int,
                    width: int, height: int, runs: int,
                    warmup: int = 1) -> Tuple[float, float]:
    """
    Untimed warm-up renders (these also compile the kernels), then `runs`
    timed ones. Returns (average seconds, pixels per second).
    """
    settings = RenderSettings(max_steps=max_steps, samples=samples,
                              color_scheme=scheme,
                              algorithm=SCHEME_ALGORITHMS[scheme])
    rng = np.random.default_rng(0)

    for _ in range(max(0, warmup)):
        do_render(settings, width, height, rng)

    times = [do_render(settings, width, height, rng) for _ in range(max(1, runs))]
    avg = float(np.mean(times))
    speed = width * height / avg if avg > 0 else 0.0
    return avg, speed

def write_results(path: str, cpu_info: str, schemes: Sequence[ColorScheme],
                  rows: Sequence[Sequence[str]]) -> None:
    with open(path, "w", newline="") as fh:
        out = csv.writer(fh)
        out.writerow(["CPU", cpu_info])
        out.writerow([])
        out.writerow(["Resolution"] + [col for s in schemes
                                       for col in (f"{s.name} Time (s)", f"{s.name} Pixels/s")])
        out.writerows(rows)

# --- CLI ---------------------------------------------------------------------

def main(argv=None):
    p = argparse.ArgumentParser(description="Benchmark the progressive fractal renderer.")
    p.add_argument("--schemes", default="hsv2,newton_colorful",
                   help="Comma separated list of color schemes")
    p.add_argument("--res", default="320x240,800x600",
                   help="Comma separated WxH list")
    p.add_argument("--steps", type=int, default=100, help="Iteration limit")
    p.add_argument("--samples", type=int, default=1, help="Samples per pixel")
    p.add_argument("--runs", type=int, default=3, help="Timed renders per combination")
    p.add_argument("--warmup", type=int, default=1, help="Untimed renders per combination")
    p.add_argument("--csv", default="benchmark_results.csv", help="Output file")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    schemes = parse_scheme_list(args.schemes)
    cpu_info = platform.processor() or platform.machine() or "Unknown CPU"
    logger.info("CPU: %s", cpu_info)
    logger.info("Settings: steps=%d, samples=%d", args.steps, args.samples)

    rows = []
    for w, h in parse_resolution_list(args.res):
        logger.info("=== %dx%d ===", w, h)
        row = [f"{w}x{h}"]
        for scheme in schemes:
            avg, speed = benchmark_combo(scheme, args.steps, args.samples,
                                         w, h, args.runs, args.warmup)
            logger.info("%18s  avg=%.4fs  speed=%s pixels/s",
                        scheme.name, avg, metric_units(speed))
            row += [f"{avg:.4f}", f"{speed:.0f}"]
        rows.append(row)

    write_results(args.csv, cpu_info, schemes, rows)
    logger.info("Benchmark results saved to %s", args.csv)

if __name__ == "__main__":
    main()

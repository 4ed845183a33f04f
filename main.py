import argparse
import logging
import sys

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from coloring.base import parse_color_scheme
from fractals.base import RenderSettings
from ui.view import FractalViewer
from utils.enums import Algorithm


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Progressive escape-time fractal viewer")
    p.add_argument("--algorithm", default="newton", choices=[a.name.lower() for a in Algorithm])
    p.add_argument("--scheme", default=None, help="Color scheme (e.g. hsv2, newton_colorful)")
    p.add_argument("--steps", type=int, default=100)
    p.add_argument("--escape-radius", type=float, default=10.0)
    p.add_argument("--newton-radius", type=float, default=10.0)
    p.add_argument("--samples", type=int, default=1)
    p.add_argument("--update-ms", type=float, default=100.0)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def settings_from_args(args) -> RenderSettings:
    algorithm = Algorithm[args.algorithm.upper()]
    scheme = args.scheme or ("newton_colorful" if algorithm == Algorithm.NEWTON else "hsv2")
    return RenderSettings(max_steps=args.steps,
                          escape_radius=args.escape_radius,
                          newton_radius=args.newton_radius,
                          color_scheme=parse_color_scheme(scheme),
                          samples=args.samples,
                          algorithm=algorithm,
                          update_interval_ms=args.update_ms)


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    viewer = FractalViewer(settings_from_args(args))
    viewer.show()
    QTimer.singleShot(0, viewer.render_fractal)
    sys.exit(app.exec())

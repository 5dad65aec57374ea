"""Open a bioactivity chart window for a compound query result (JSON)."""
from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from bioactivity_graph.chart import BioActivityChart
from bioactivity_graph.config import load_settings
from bioactivity_graph.export_csv import write_points_csv
from bioactivity_graph.loader import load_query_result
from bioactivity_graph.logging_config import setup_logging
from bioactivity_graph.render import ChartRenderer

logger = logging.getLogger("bioactivity_graph.viewer")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bioactivity scatter/violin chart")
    parser.add_argument("data", help="Compound query result (JSON)")
    parser.add_argument("--config", help="Chart settings JSON (default ~/.bioactivity_graph.json)")
    parser.add_argument("--seed", type=int, help="Seed for the jitter generator")
    parser.add_argument("--jitter", action="store_true", help="Start with jitter enabled")
    parser.add_argument("--violin", action="store_true", help="Start with violin plots enabled")
    parser.add_argument("--export-png", help="Render to this PNG and exit")
    parser.add_argument("--export-csv", help="Write the points to this CSV and exit")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser


def export_headless(args: argparse.Namespace, compound, settings, rng) -> int:
    chart = BioActivityChart(compound, settings, rng=rng)
    chart.jitter_enabled = args.jitter
    chart.violin_enabled = args.violin
    chart.update_positions()
    if not chart.has_data:
        print(f"No BioActivity Data to Display ({chart.name or 'unnamed compound'}).")
    if args.export_png:
        ChartRenderer(settings).save_png(chart, args.export_png)
        print(f"Wrote {args.export_png}")
    if args.export_csv:
        write_points_csv(args.export_csv, chart.points)
        print(f"Wrote {args.export_csv}")
    return 0


def run_window(args: argparse.Namespace, compound, settings, rng) -> int:
    import tkinter as tk
    from bioactivity_graph.ui_window import BioActivityWindow

    root = tk.Tk()
    root.withdraw()
    win = BioActivityWindow(root, compound=compound, settings=settings, rng=rng)
    win.protocol("WM_DELETE_WINDOW", root.destroy)
    win.bind("<Destroy>", lambda e: root.destroy() if e.widget is win else None, add="+")
    if win.chart.has_data:
        if args.violin:
            win.var_violin.set(True)
            win.controller.toggle_violin()
        if args.jitter:
            win.var_jitter.set(True)
            win.controller.toggle_jitter()
    root.mainloop()
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        compound = load_query_result(args.data)
    except (OSError, ValueError) as e:
        logger.error("Could not load %s: %s", args.data, e)
        return 1

    settings = load_settings(args.config)
    rng = np.random.default_rng(args.seed)

    if args.export_png or args.export_csv:
        return export_headless(args, compound, settings, rng)
    return run_window(args, compound, settings, rng)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Command-line interface for running conjugate analyses from a YAML file.
"""

import argparse
import logging
from pathlib import Path

import yaml
from jax import numpy as jnp

from conjugax.conjugate.models import get_conjugate_model
from conjugax.core.densities import default_grid, density_curves
from conjugax.core.errors import ConjugaxError
from conjugax.core.summary import analyze, format_summary
from conjugax.data.loaders import sample_from_config
from conjugax.plotting.densities import PlotConfig, save_figure
from conjugax.utils.config import AnalysisSpec, load_config, parse_analyses, plot_config


def analysis_grid(spec: AnalysisSpec, prior, posterior, sample):
    """Configured grid, or one covering prior, likelihood and posterior."""
    if spec.grid:
        return jnp.linspace(spec.grid["start"], spec.grid["stop"], int(spec.grid.get("num", 1000)))
    return default_grid([prior, posterior, prior.likelihood(sample)])


def run_analysis(spec: AnalysisSpec, base_dir: Path, plot_dir=None, config: PlotConfig = PlotConfig()) -> str:
    """
    Load the sample, update the prior and optionally save the density plot.

    Returns:
        str: The formatted summary line
    """
    prior = get_conjugate_model(spec.family, **spec.prior)
    sample = sample_from_config(spec.sample, base_dir=base_dir)
    posterior, summary = analyze(prior, sample, threshold=spec.threshold, level=spec.level)
    line = f"[{spec.name}] {format_summary(summary)}"

    if plot_dir is not None:
        grid = analysis_grid(spec, prior, posterior, sample)
        curves = density_curves(grid, prior, sample, threshold=spec.threshold, level=spec.level)
        path = save_figure(curves, Path(plot_dir) / f"{spec.name}.png", config=config, title=spec.name)
        logging.info("Saved plot for %s to %s", spec.name, path)

    return line


def main(argv=None):
    """
    Main entry point for the analysis CLI.
    """
    parser = argparse.ArgumentParser(description="Closed-form conjugate Bayesian updates")
    parser.add_argument("--config", required=True,
                        help="path to analyses.yaml")
    parser.add_argument("--plot-dir",
                        help="directory for density plots (overrides output.plot_dir)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        default="INFO", help="logging level")
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S")

    config_path = Path(args.config)
    try:
        cfg = load_config(config_path)
        plot_dir = args.plot_dir or (cfg.get("output") or {}).get("plot_dir")
        style = plot_config(cfg)
        analyses = parse_analyses(cfg)
    except (ConjugaxError, OSError, yaml.YAMLError, AttributeError, TypeError) as e:
        logging.error("Invalid configuration: %s", e)
        return 1
    logging.info("Running analyses: %s", [a.name for a in analyses])

    failures = 0
    for spec in analyses:
        try:
            print(run_analysis(spec, config_path.parent, plot_dir=plot_dir, config=style))
        except (ValueError, OSError, KeyError, TypeError) as e:
            failures += 1
            logging.error("Analysis %s failed: %s", spec.name, e)

    return 1 if failures else 0


if __name__ == "__main__":
    exit(main())

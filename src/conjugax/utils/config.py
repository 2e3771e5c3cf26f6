"""
Configuration utilities for conjugax.

An analyses file looks like:

    output:
      plot_dir: plots
    plot:
      posterior_color: "#7570b3"
    analyses:
      - name: bernoulli
        family: bernoulli
        prior: {alpha: 1, beta: 5}
        sample: {data: [0, 1, 0, 0, 1]}
        level: 0.95
        grid: {start: 0, stop: 1, num: 500}
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from conjugax.core.errors import InvalidParameter
from conjugax.plotting.densities import PlotConfig


@dataclass(frozen=True)
class AnalysisSpec:
    name: str
    family: str
    prior: Dict[str, float]
    sample: Dict[str, Any]
    threshold: Optional[float] = None
    level: Optional[float] = 0.95
    grid: Optional[Dict[str, float]] = None


def load_config(path: Path) -> dict:
    """
    Load configuration from YAML file.

    Args:
        path (Path): Path to YAML configuration file

    Returns:
        dict: Parsed configuration
    """
    with path.open() as fh:
        config = yaml.safe_load(fh) or {}

    # Override with environment variables when available
    if "CONJUGAX_PLOT_DIR" in os.environ:
        config.setdefault("output", {})["plot_dir"] = os.environ["CONJUGAX_PLOT_DIR"]

    return config


def parse_analyses(cfg: dict) -> List[AnalysisSpec]:
    analyses = []
    for i, entry in enumerate(cfg.get("analyses", [])):
        name = entry.get("name", f"analysis-{i}")
        for key in ("family", "prior", "sample"):
            if key not in entry:
                raise InvalidParameter(f"analysis {name!r} is missing {key!r}")
        analyses.append(AnalysisSpec(
            name=name,
            family=entry["family"],
            prior=dict(entry["prior"]),
            sample=dict(entry["sample"]),
            threshold=entry.get("threshold"),
            level=entry.get("level", 0.95),
            grid=entry.get("grid"),
        ))
    return analyses


def plot_config(cfg: dict) -> PlotConfig:
    known = {f.name for f in fields(PlotConfig)}
    overrides = {k: v for k, v in (cfg.get("plot") or {}).items() if k in known}
    if "figsize" in overrides:
        overrides["figsize"] = tuple(overrides["figsize"])
    return PlotConfig(**overrides)

"""
Matplotlib rendering of DensityCurves.

All styling is carried by an explicit PlotConfig; nothing here touches
rcParams or other process-wide matplotlib state.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from matplotlib.figure import Figure

from conjugax.core.densities import DensityCurves


@dataclass(frozen=True)
class PlotConfig:
    prior_color: str = "#1b9e77"
    likelihood_color: str = "#d95f02"
    posterior_color: str = "#7570b3"
    prior_label: str = "prior"
    likelihood_label: str = "likelihood"
    posterior_label: str = "posterior"
    figsize: Tuple[float, float] = (8.0, 4.5)
    linewidth: float = 2.0
    fill_alpha: float = 0.25
    mark_threshold: bool = True
    show_legend: bool = True


def plot_density_curves(curves: DensityCurves, config: PlotConfig = PlotConfig(), ax=None, title: Optional[str] = None):
    """
    Draw prior, likelihood and posterior on ax (a new figure's axes if None).
    Shades the posterior credible interval and marks the threshold when the
    curves carry them as annotations. Returns the axes.
    """
    if ax is None:
        fig = Figure(figsize=config.figsize)
        ax = fig.add_subplot(1, 1, 1)

    x = np.asarray(curves.grid)
    ax.plot(x, np.asarray(curves.prior), color=config.prior_color,
            linewidth=config.linewidth, label=config.prior_label)
    ax.plot(x, np.asarray(curves.likelihood), color=config.likelihood_color,
            linewidth=config.linewidth, linestyle="--", label=config.likelihood_label)
    posterior = np.asarray(curves.posterior)
    ax.plot(x, posterior, color=config.posterior_color,
            linewidth=config.linewidth, label=config.posterior_label)

    interval = curves.annotations.get("credible_interval")
    if interval is not None and x.size:
        lo, hi = interval
        inside = (x >= lo) & (x <= hi)
        ax.fill_between(x, 0, posterior, where=inside, color=config.posterior_color,
                        alpha=config.fill_alpha, label=f"{curves.annotations['level']:.0%} CI")

    threshold = curves.annotations.get("threshold")
    if config.mark_threshold and threshold is not None:
        tail = curves.annotations.get("tail_probability")
        label = f"P({curves.param} >= {threshold:g}) = {tail:.3f}" if tail is not None else None
        ax.axvline(threshold, color="black", linestyle=":", label=label)

    ax.set_xlabel(curves.param)
    ax.set_ylabel("density")
    if title:
        ax.set_title(title)
    if config.show_legend and x.size:
        ax.legend()
    return ax


def save_figure(curves: DensityCurves, path: Union[str, Path], config: PlotConfig = PlotConfig(),
                title: Optional[str] = None) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig = Figure(figsize=config.figsize)
    ax = fig.add_subplot(1, 1, 1)
    plot_density_curves(curves, config=config, ax=ax, title=title)
    fig.tight_layout()
    fig.savefig(path)
    return path

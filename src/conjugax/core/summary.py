"""
Scalar summaries of a conjugate update.

Moments come from the closed-form mean_/variance_ of each family; the tail
probability from the posterior CDF and the credible interval from the posterior
quantile function. Nothing here integrates numerically.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

from jax.typing import ArrayLike

from conjugax.conjugate.base import ConjugateModel, as_sample
from conjugax.core.errors import InvalidParameter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Summary:
    family: str
    param: str
    n: Optional[int]
    prior_mean: float
    prior_sd: float
    posterior_mean: float
    posterior_sd: float
    level: Optional[float] = None
    credible_interval: Optional[Tuple[float, float]] = None
    threshold: Optional[float] = None
    tail_probability: Optional[float] = None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize(
    prior: ConjugateModel,
    posterior: ConjugateModel,
    n: Optional[int] = None,
    threshold: Optional[float] = None,
    level: Optional[float] = 0.95,
) -> Summary:
    """
    Summarize a prior and the posterior derived from it.

    Args:
        prior: Prior distribution of the parameter
        posterior: Posterior distribution of the same family
        n: Sample size behind the posterior, reported as-is
        threshold: If given, report Pr(param >= threshold | data)
        level: Coverage of the equal-tailed credible interval, None to skip it

    Returns:
        Summary: prior/posterior moments plus the optional interval and tail probability
    """
    if type(prior) is not type(posterior):
        raise InvalidParameter(
            f"prior and posterior families differ: {type(prior).__name__} vs {type(posterior).__name__}")

    param = prior.param
    interval = posterior.credible_interval(level) if level is not None else None
    tail = float(posterior.tail_probability(threshold)) if threshold is not None else None

    summary = Summary(
        family=type(prior).__name__,
        param=param,
        n=n,
        prior_mean=float(prior.mean_()[param]),
        prior_sd=float(prior.std_()[param]),
        posterior_mean=float(posterior.mean_()[param]),
        posterior_sd=float(posterior.std_()[param]),
        level=level,
        credible_interval=interval,
        threshold=threshold,
        tail_probability=tail,
    )
    logger.debug("Summary for %s: %s", summary.family, summary)
    return summary


def analyze(
    prior: ConjugateModel,
    data: ArrayLike,
    threshold: Optional[float] = None,
    level: Optional[float] = 0.95,
) -> Tuple[ConjugateModel, Summary]:
    """Update prior with data and summarize; returns (posterior, summary)."""
    posterior = prior.posterior_params(data)
    n = int(as_sample(data).size)
    return posterior, summarize(prior, posterior, n=n, threshold=threshold, level=level)


def format_summary(summary: Summary) -> str:
    p = summary.param
    parts = [
        f"{summary.family}",
        f"n={summary.n}" if summary.n is not None else None,
        f"prior {p}: mean={summary.prior_mean:.4f} sd={summary.prior_sd:.4f}",
        f"posterior {p}: mean={summary.posterior_mean:.4f} sd={summary.posterior_sd:.4f}",
    ]
    if summary.credible_interval is not None:
        lo, hi = summary.credible_interval
        parts.append(f"{summary.level:.0%} CI=({lo:.4f}, {hi:.4f})")
    if summary.tail_probability is not None:
        parts.append(f"P({p} >= {summary.threshold:g})={summary.tail_probability:.4f}")
    return "  ".join(part for part in parts if part)

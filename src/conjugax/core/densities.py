# Density data for plotting: arrays only, no drawing.
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Union

import numpy as np
from jax import numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from conjugax.conjugate.base import ConjugateModel, as_sample


@dataclass(frozen=True)
class DensityCurves:
    """
    Parallel arrays over grid: prior, normalized likelihood and posterior densities.
    annotations holds scalars a renderer may want (posterior mean, interval, tail probability).
    """
    grid: Array
    prior: Array
    likelihood: Array
    posterior: Array
    param: str = "theta"
    annotations: Dict[str, object] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Array]:
        return {
            "prior": self.prior,
            "likelihood": self.likelihood,
            "posterior": self.posterior,
        }


def _as_grid(grid: ArrayLike) -> Array:
    return jnp.ravel(jnp.asarray(grid, dtype=jnp.result_type(float)))


def evaluate_densities(grid: ArrayLike, distributions: Mapping[str, ConjugateModel]) -> Dict[str, Array]:
    """pdf of every named distribution over the grid; an empty grid gives empty arrays"""
    x = _as_grid(grid)
    if x.size == 0:
        return {name: jnp.zeros((0,)) for name in distributions}
    return {name: model.pdf(x) for name, model in distributions.items()}


def density_curves(
    grid: ArrayLike,
    prior: ConjugateModel,
    data: ArrayLike,
    threshold: Optional[float] = None,
    level: Optional[float] = None,
) -> DensityCurves:
    """
    Evaluate prior, normalized likelihood and posterior of a single analysis on grid.

    The likelihood is rendered through prior.likelihood(data), i.e. the family's own
    flat-prior convention, so it integrates to one like the other two curves.
    """
    posterior = prior.posterior_params(data)
    values = evaluate_densities(grid, {
        "prior": prior,
        "likelihood": prior.likelihood(data),
        "posterior": posterior,
    })

    param = prior.param
    annotations: Dict[str, object] = {"posterior_mean": float(posterior.mean_()[param])}
    if threshold is not None:
        annotations["threshold"] = threshold
        annotations["tail_probability"] = float(posterior.tail_probability(threshold))
    if level is not None:
        annotations["level"] = level
        annotations["credible_interval"] = posterior.credible_interval(level)

    return DensityCurves(
        grid=_as_grid(grid),
        prior=values["prior"],
        likelihood=values["likelihood"],
        posterior=values["posterior"],
        param=param,
        annotations=annotations,
    )


def default_grid(
    models: Union[ConjugateModel, Sequence[ConjugateModel]],
    num: int = 1000,
    coverage: float = 0.999,
) -> Array:
    """
    Evenly spaced grid spanning the central coverage mass of every model given.
    """
    if isinstance(models, ConjugateModel):
        models = [models]
    bounds = np.array([m.credible_interval(coverage) for m in models])
    return jnp.linspace(bounds[:, 0].min(), bounds[:, 1].max(), num)


def sequential_posteriors(prior: ConjugateModel, data: ArrayLike) -> List[ConjugateModel]:
    """
    Posterior after each prefix of data, starting with the prior itself (n = 0).
    Each step reuses the previous posterior as the prior for the next observation.
    """
    x = as_sample(data)
    posteriors = [prior]
    for i in range(x.size):
        posteriors.append(posteriors[-1].posterior_params(x[i:i + 1]))
    return posteriors

# conjugate/base.py
from typing import Any, Tuple
from abc import ABC, abstractmethod
from dataclasses import fields
from jax.typing import ArrayLike
from jax import Array
from jax import numpy as jnp

from conjugax.core.errors import InvalidInput, InvalidParameter


class ConjugateModel(ABC):
    # mean_, variance_, std_ are keyed by param_names
    """base class for closed-form conjugate updates of a single scalar parameter"""
    param_names: Tuple[str, ...] = ()

    @abstractmethod
    def sufficient_stats(self, data: ArrayLike) -> Array: ...
    """
    validates data against the family support and reduces it to sufficient statistics
    """

    @abstractmethod
    def posterior_from_stats(self, stats: ArrayLike) -> "ConjugateModel": ...
    """
    returns an object of the same class with updated posterior parameters from sufficient statistics
    """

    @abstractmethod
    def likelihood(self, data: ArrayLike) -> "ConjugateModel": ...
    """
    returns an object of the same class whose density is the normalized likelihood of data
    """

    @abstractmethod
    def mean_(self) -> dict: ...

    @abstractmethod
    def variance_(self) -> dict: ...

    @abstractmethod
    def logpdf(self, x: ArrayLike) -> Array: ...

    @abstractmethod
    def cdf(self, x: ArrayLike) -> Array: ...

    @abstractmethod
    def ppf(self, q: ArrayLike) -> Any: ...
    """
    quantile function of the parameter distribution
    """

    @abstractmethod
    def log_marginal_likelihood(self, data: ArrayLike) -> Array: ...

    @abstractmethod
    def predictive_logpdf(self, x_new: ArrayLike, data: ArrayLike) -> Array: ...

    def posterior_params(self, data: ArrayLike) -> "ConjugateModel":
        """
        Return an object of the same class with posterior updated parameters.
        The prior (self) is left untouched; an empty sample returns the prior's parameters.
        """
        return self.posterior_from_stats(self.sufficient_stats(data))

    @property
    def param(self) -> str:
        return self.param_names[0]

    def std_(self) -> dict:
        return {k: jnp.sqrt(v) for k, v in self.variance_().items()}

    def pdf(self, x: ArrayLike) -> Array:
        return jnp.exp(self.logpdf(x))

    def tail_probability(self, threshold: float) -> Array:
        """Pr(param >= threshold) under this distribution."""
        return 1.0 - self.cdf(threshold)

    def credible_interval(self, level: float = 0.95) -> Tuple[float, float]:
        """
        Equal-tailed interval, i.e. the [(1-level)/2, 1-(1-level)/2] quantiles.
        """
        if not 0.0 < level < 1.0:
            raise InvalidParameter(f"credible level must lie in (0, 1), got {level}")
        tail = (1.0 - level) / 2
        lo, hi = self.ppf([tail, 1.0 - tail])
        return float(lo), float(hi)

    def hyperparams(self) -> dict:
        """hyperparameters as plain floats, e.g. for logging or tabulation"""
        return {f.name: float(getattr(self, f.name)) for f in fields(self)}


def as_sample(data: ArrayLike) -> Array:
    x = jnp.asarray(data, dtype=jnp.result_type(float))
    if x.ndim == 0:
        x = jnp.atleast_1d(x)
    if x.ndim != 1:
        raise InvalidInput(f"sample must be one-dimensional, got shape {x.shape}")
    return x


def require_positive(**params) -> None:
    for name, value in params.items():
        if not jnp.all(jnp.asarray(value) > 0):
            raise InvalidParameter(f"{name} must be positive, got {value}")

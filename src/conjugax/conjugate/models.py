from conjugax.conjugate.base import ConjugateModel, as_sample, require_positive
from conjugax.core.errors import InvalidInput
from dataclasses import dataclass
from typing import Union
import numpy as np
import scipy.stats
from jax import numpy as jnp
from jax.typing import ArrayLike
from jax import Array
from jax.scipy.special import betaln, betainc, gammainc, gammaln
from jax.scipy.stats import norm, gamma, beta as beta_dist, nbinom

"""
Implements the following conjugate models (using the base ConjugateModel):
1. Normal - Normal for location family Gaussian (univariate) with known variance sigma2
2. Poisson - Gamma
3. Bernoulli - Beta
"""

Scalar = Union[float, Array]


def get_conjugate_model(kind: str, **kwargs) -> ConjugateModel:
    kind = kind.lower()
    if kind in ("gaussian", "normal"):
        return NormalKnownVariance(**kwargs)
    elif kind == "poisson":
        return PoissonGamma(**kwargs)
    elif kind == "bernoulli":
        return BernoulliBeta(**kwargs)
    else:
        raise ValueError(f"Unknown kind: {kind}")


@dataclass(frozen=True)
class NormalKnownVariance(ConjugateModel):
    """
    observations follow N(mu, sigma2) univariate with sigma2 known
    prior on mu is N(mu0, tau2)
    prior_params = (mu0, tau2)
    note: tau2 and sigma2 are variances, not precisions
    """
    mu0: Scalar
    tau2: Scalar
    sigma2: Scalar
    param_names = ("mu",)

    def __post_init__(self):
        require_positive(tau2=self.tau2, sigma2=self.sigma2)

    def sufficient_stats(self, data: ArrayLike) -> Array:
        # stats is [sample size, sum]
        x = as_sample(data)
        if not jnp.all(jnp.isfinite(x)):
            raise InvalidInput("Gaussian sample contains non-finite values")
        return jnp.array([x.size, jnp.sum(x)])

    def weight(self, n: ArrayLike) -> Array:
        """
        Share of the posterior mean carried by the sample mean after n observations:
            w = (n / sigma2) / (n / sigma2 + 1 / tau2)
        """
        data_precision = jnp.asarray(n) / self.sigma2
        return data_precision / (data_precision + 1.0 / self.tau2)

    def posterior_from_stats(self, stats: ArrayLike) -> "NormalKnownVariance":
        n, sum_x = stats[0], stats[1]
        if n == 0:
            return NormalKnownVariance(mu0=self.mu0, tau2=self.tau2, sigma2=self.sigma2)
        w = self.weight(n)
        mean_x = sum_x / n
        return NormalKnownVariance(
            mu0=w * mean_x + (1 - w) * self.mu0,
            tau2=1.0 / (n / self.sigma2 + 1.0 / self.tau2),
            sigma2=self.sigma2,
        )

    def likelihood(self, data: ArrayLike) -> "NormalKnownVariance":
        # N(x_bar, sigma2 / n) as a function of mu
        n, sum_x = self.sufficient_stats(data)
        if n == 0:
            raise InvalidInput("Gaussian likelihood needs at least one observation")
        return NormalKnownVariance(mu0=sum_x / n, tau2=self.sigma2 / n, sigma2=self.sigma2)

    def mean_(self):
        return {
            "mu": self.mu0
        }

    def variance_(self):
        return {
            "mu": self.tau2
        }

    def logpdf(self, x: ArrayLike) -> Array:
        return norm.logpdf(x, loc=self.mu0, scale=jnp.sqrt(self.tau2))

    def cdf(self, x: ArrayLike) -> Array:
        return norm.cdf(x, loc=self.mu0, scale=jnp.sqrt(self.tau2))

    def ppf(self, q: ArrayLike) -> np.ndarray:
        return scipy.stats.norm.ppf(q, loc=float(self.mu0), scale=float(jnp.sqrt(self.tau2)))

    def log_marginal_likelihood(self, data: ArrayLike) -> Array:
        x = as_sample(data)
        n = x.size
        mu0, tau2, sigma2 = self.mu0, self.tau2, self.sigma2
        if n == 0:
            return jnp.asarray(0.0)
        mean_x = jnp.mean(x)
        denom = sigma2 + n * tau2
        return (
            -0.5 * n * jnp.log(2 * jnp.pi * sigma2)
            + 0.5 * jnp.log(sigma2 / denom)
            - jnp.sum(x ** 2) / (2 * sigma2)
            - mu0 ** 2 / (2 * tau2)
            + (tau2 * n ** 2 * mean_x ** 2 / sigma2 + sigma2 * mu0 ** 2 / tau2 + 2 * n * mean_x * mu0) / (2 * denom)
        )

    def predictive_logpdf(self, x_new: ArrayLike, data: ArrayLike) -> Array:
        post = self.posterior_params(data)
        return norm.logpdf(x_new, loc=post.mu0, scale=jnp.sqrt(post.tau2 + self.sigma2))


@dataclass(frozen=True)
class PoissonGamma(ConjugateModel):
    """
    observations follow Poisson(lambda)
    prior on lambda is Gamma
    prior_params = (alpha, beta)
    note: beta is rate parameter
    """
    alpha: Scalar
    beta: Scalar
    param_names = ("lambda",)

    def __post_init__(self):
        require_positive(alpha=self.alpha, beta=self.beta)

    def sufficient_stats(self, data: ArrayLike) -> Array:
        # stats is [sample size, sum]
        x = as_sample(data)
        if not jnp.all(jnp.isfinite(x) & (x >= 0) & (x == jnp.floor(x))):
            raise InvalidInput("Poisson sample must hold non-negative integer counts")
        return jnp.array([x.size, jnp.sum(x)])

    def posterior_from_stats(self, stats: ArrayLike) -> "PoissonGamma":
        return PoissonGamma(alpha=self.alpha + stats[1], beta=self.beta + stats[0])

    def likelihood(self, data: ArrayLike) -> "PoissonGamma":
        # lambda^S exp(-n lambda) normalizes to Gamma(S + 1, n)
        n, total = self.sufficient_stats(data)
        if n == 0:
            raise InvalidInput("Poisson likelihood needs at least one observation")
        return PoissonGamma(alpha=1 + total, beta=n)

    def mean_(self):
        return {
            "lambda": self.alpha / self.beta
        }

    def variance_(self):
        return {
            "lambda": self.alpha / self.beta ** 2
        }

    def logpdf(self, x: ArrayLike) -> Array:
        return gamma.logpdf(x, self.alpha, scale=1.0 / self.beta)

    def cdf(self, x: ArrayLike) -> Array:
        x = jnp.asarray(x)
        return gammainc(self.alpha, self.beta * jnp.maximum(x, 0.0))

    def ppf(self, q: ArrayLike) -> np.ndarray:
        return scipy.stats.gamma.ppf(q, float(self.alpha), scale=1.0 / float(self.beta))

    def log_marginal_likelihood(self, data: ArrayLike) -> Array:
        x = as_sample(data)
        n = x.size
        S = x.sum()
        # log(Π 1/x_i!) = -Σ log(x_i!)
        log_factorial_term = -jnp.sum(gammaln(x + 1))

        return (
                log_factorial_term
                + self.alpha * jnp.log(self.beta)
                - gammaln(self.alpha)
                + gammaln(self.alpha + S)
                - (self.alpha + S) * jnp.log(self.beta + n)
        )

    def predictive_logpdf(self, x_new: int, data: ArrayLike) -> Array:
        post = self.posterior_params(data)
        return nbinom.logpmf(x_new, post.alpha, post.beta / (post.beta + 1))


@dataclass(frozen=True)
class BernoulliBeta(ConjugateModel):
    """
    observations follow Bernoulli(theta), coded as 0/1
    prior on theta is Beta(alpha, beta)
    prior_params = (alpha, beta)
    """
    alpha: Scalar
    beta: Scalar
    param_names = ("theta",)

    def __post_init__(self):
        require_positive(alpha=self.alpha, beta=self.beta)

    def sufficient_stats(self, data: ArrayLike) -> Array:
        # stats are successes and failures -> array of size 2
        x = as_sample(data)
        if not jnp.all((x == 0) | (x == 1)):
            raise InvalidInput("Bernoulli sample must hold only 0/1 values")
        successes = jnp.sum(x)
        return jnp.array([successes, x.size - successes])

    def posterior_from_stats(self, stats: ArrayLike) -> "BernoulliBeta":
        return BernoulliBeta(
            alpha=self.alpha + stats[0],
            beta=self.beta + stats[1]
        )

    def likelihood(self, data: ArrayLike) -> "BernoulliBeta":
        # uniform for an empty sample
        successes, failures = self.sufficient_stats(data)
        return BernoulliBeta(alpha=successes + 1, beta=failures + 1)

    def mean_(self):
        return {
            "theta": self.alpha / (self.alpha + self.beta)
        }

    def variance_(self):
        return {
            "theta": self.alpha * self.beta / ((self.alpha + self.beta + 1) * (self.alpha + self.beta) ** 2)
        }

    def logpdf(self, x: ArrayLike) -> Array:
        return beta_dist.logpdf(x, self.alpha, self.beta)

    def cdf(self, x: ArrayLike) -> Array:
        x = jnp.asarray(x)
        return betainc(self.alpha, self.beta, jnp.clip(x, 0.0, 1.0))

    def ppf(self, q: ArrayLike) -> np.ndarray:
        return scipy.stats.beta.ppf(q, float(self.alpha), float(self.beta))

    def log_marginal_likelihood(self, data: ArrayLike) -> Array:
        successes, failures = self.sufficient_stats(data)
        return (
                betaln(self.alpha + successes, self.beta + failures) -
                betaln(self.alpha, self.beta)
        )

    def predictive_logpdf(self, x_new: ArrayLike, data: ArrayLike) -> Array:
        post = self.posterior_params(data)
        x_new = jnp.asarray(x_new)
        return (
                x_new * jnp.log(post.alpha)
                + (1 - x_new) * jnp.log(post.beta)
                - jnp.log(post.alpha + post.beta)
        )

import numpy as np
import pytest
import scipy.stats
from jax import numpy as jnp

from conjugax.conjugate.models import BernoulliBeta, NormalKnownVariance, PoissonGamma
from conjugax.core.errors import InvalidParameter
from conjugax.core.summary import analyze, format_summary, summarize


def test_summarize_bernoulli():
    prior = BernoulliBeta(alpha=1.0, beta=5.0)
    posterior = BernoulliBeta(alpha=5.0, beta=11.0)
    summary = summarize(prior, posterior, n=10)

    assert summary.family == "BernoulliBeta"
    assert summary.param == "theta"
    assert summary.n == 10
    assert summary.prior_mean == pytest.approx(1 / 6)
    assert summary.prior_sd == pytest.approx(np.sqrt(5 / (36 * 7)), rel=1e-5)
    assert summary.posterior_mean == pytest.approx(5 / 16)
    assert summary.posterior_sd == pytest.approx(np.sqrt(55 / (256 * 17)), rel=1e-5)
    assert summary.level == 0.95
    assert summary.credible_interval == pytest.approx(tuple(scipy.stats.beta.ppf([0.025, 0.975], 5, 11)))
    assert summary.tail_probability is None


def test_summarize_gaussian_tail_probability():
    prior = NormalKnownVariance(mu0=20.0, tau2=25.0, sigma2=25.0)
    posterior, summary = analyze(prior, [15.77, 20.5, 8.26, 14.37, 21.09], threshold=20.0, level=None)

    assert summary.n == 5
    assert summary.prior_sd == pytest.approx(5.0)
    assert summary.posterior_sd == pytest.approx(np.sqrt(25 / 6), rel=1e-5)
    assert summary.credible_interval is None
    assert summary.threshold == 20.0
    assert summary.tail_probability == pytest.approx(
        scipy.stats.norm.sf(20.0, loc=summary.posterior_mean, scale=np.sqrt(25 / 6)), abs=1e-5)
    assert 0.0 < summary.tail_probability < 0.5


def test_analyze_poisson():
    posterior, summary = analyze(PoissonGamma(alpha=2.0, beta=0.5), [3, 5, 2, 4], level=0.9)
    assert posterior.hyperparams() == pytest.approx({"alpha": 16.0, "beta": 4.5})
    assert summary.posterior_mean == pytest.approx(3.5556, abs=1e-4)
    lo, hi = summary.credible_interval
    assert lo < summary.posterior_mean < hi


def test_summarize_rejects_mixed_families():
    with pytest.raises(InvalidParameter):
        summarize(PoissonGamma(alpha=1.0, beta=1.0), BernoulliBeta(alpha=1.0, beta=1.0))


def test_summarize_rejects_bad_level():
    prior = PoissonGamma(alpha=1.0, beta=1.0)
    with pytest.raises(InvalidParameter):
        summarize(prior, prior, level=95)


def test_format_summary():
    _, summary = analyze(NormalKnownVariance(mu0=20.0, tau2=25.0, sigma2=25.0), [15.77], threshold=20.0)
    line = format_summary(summary)
    assert line.startswith("NormalKnownVariance")
    assert "n=1" in line
    assert "95% CI=(" in line
    assert "P(mu >= 20)=" in line
    assert "posterior mu: mean=17.8850" in line


def test_summary_as_dict():
    _, summary = analyze(BernoulliBeta(alpha=1.0, beta=1.0), [1, 1, 0])
    d = summary.as_dict()
    assert d["posterior_mean"] == pytest.approx(3 / 5)
    assert set(d) >= {"prior_mean", "prior_sd", "posterior_mean", "posterior_sd", "credible_interval"}


def test_analyze_accepts_zero_dimensional_sample():
    posterior, summary = analyze(NormalKnownVariance(mu0=20.0, tau2=25.0, sigma2=25.0), jnp.asarray(15.77))
    assert summary.n == 1
    assert float(posterior.mu0) == pytest.approx(17.885, rel=1e-5)

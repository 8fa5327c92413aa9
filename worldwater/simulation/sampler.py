"""Per-iteration sampling of the five sea level rise contributors.

Each contributor value is one Box-Muller normal draw, scaled to the
contributor's temperature-dependent mean and spread, then clamped at zero.
Two uniforms are consumed per contributor (u1 then u2), contributors in
table order, iterations in sequence. ``sample_iterations`` reads the
generator in exactly that order, so the scalar and vectorized paths see the
same stream for the same seed.
"""

import numpy as np

from worldwater.simulation.constants import CONTRIBUTOR_TABLE
from worldwater.simulation.models import Contributor, IterationSample

CONTRIBUTORS: tuple[Contributor, ...] = tuple(
    Contributor(key=key, **params) for key, params in CONTRIBUTOR_TABLE.items()
)

_MEAN_PER_DEGREE = np.array([c.mean_per_degree for c in CONTRIBUTORS])
_STD_PER_DEGREE = np.array([c.std_per_degree for c in CONTRIBUTORS])
_EXPONENTS = np.array([c.non_linear_exponent for c in CONTRIBUTORS])


def contributor_moments(temperature_increase: float) -> tuple[np.ndarray, np.ndarray]:
    """Return (means, stds) per contributor for a temperature increase."""
    scaled = np.power(temperature_increase, _EXPONENTS)
    means = _MEAN_PER_DEGREE * scaled
    stds = _STD_PER_DEGREE * np.sqrt(temperature_increase)
    return means, stds


def box_muller(u1, u2):
    """Standard normal variate from two uniforms in [0, 1).

    ``1 - u1`` lies in (0, 1], keeping the logarithm finite.
    """
    return np.sqrt(-2.0 * np.log(1.0 - u1)) * np.cos(2.0 * np.pi * u2)


def sample_iteration(temperature_increase: float, rng: np.random.Generator) -> IterationSample:
    """Draw one value per contributor and their sum."""
    means, stds = contributor_moments(temperature_increase)
    per_contributor: dict[str, float] = {}
    total = 0.0
    for contributor, mean, std in zip(CONTRIBUTORS, means, stds):
        u1 = rng.random()
        u2 = rng.random()
        value = max(0.0, float(mean + box_muller(u1, u2) * std))
        per_contributor[contributor.key] = value
        total += value
    return IterationSample(per_contributor=per_contributor, total=total)


def sample_iterations(
    temperature_increase: float,
    iterations: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Vectorized draw of ``iterations`` samples, shape (iterations, n_contributors)."""
    means, stds = contributor_moments(temperature_increase)
    uniforms = rng.random((iterations, len(CONTRIBUTORS), 2))
    z = box_muller(uniforms[..., 0], uniforms[..., 1])
    return np.maximum(0.0, means + z * stds)

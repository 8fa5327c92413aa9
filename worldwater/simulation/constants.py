"""
Sea level rise simulation constants.
Contributor magnitudes follow IPCC AR6 WG1 Chapter 9 ranges.
"""

# Per-degree mean and standard deviation of each contributor in meters.
# Contribution means scale as T**non_linear_exponent; spread scales as sqrt(T).
# Ordered: iteration sampling draws contributors in this order.
CONTRIBUTOR_TABLE: dict[str, dict] = {
    "thermal_expansion": {
        "name": "Thermal Expansion",
        "mean_per_degree": 0.12,
        "std_per_degree": 0.04,
        "non_linear_exponent": 1.0,   # linear
    },
    "glaciers": {
        "name": "Mountain Glaciers",
        "mean_per_degree": 0.10,
        "std_per_degree": 0.03,
        "non_linear_exponent": 0.9,   # glaciers deplete
    },
    "greenland": {
        "name": "Greenland Ice Sheet",
        "mean_per_degree": 0.06,
        "std_per_degree": 0.04,
        "non_linear_exponent": 1.4,
    },
    "antarctic": {
        "name": "Antarctic Ice Sheet",
        "mean_per_degree": 0.05,
        "std_per_degree": 0.08,
        "non_linear_exponent": 1.8,   # MICI risk
    },
    "land_water": {
        "name": "Land Water Storage",
        "mean_per_degree": 0.01,
        "std_per_degree": 0.01,
        "non_linear_exponent": 1.0,
    },
}

DEFAULT_ITERATIONS = 5000
BASE_SEED = 1337
UINT32_MAX = 0xFFFFFFFF

# Temperature input domain (degrees C above pre-industrial)
TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 10.0

# Nearest-rank percentile fractions
PERCENTILE_FRACTIONS: dict[str, float] = {
    "p5": 0.05,
    "median": 0.5,
    "p95": 0.95,
}

# Statistic used as the rendered flood level
FLOOD_METRICS: dict[str, str] = {
    "median": "Median (50th)",
    "p95": "High-end (95th)",
}

# Upper bounds (meters, exclusive) for impact descriptions
IMPACT_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (0.1, "Minimal visible change"),
    (0.3, "Minor coastal flooding during storms"),
    (0.5, "Significant coastal erosion, regular tidal flooding"),
    (1.0, "Major coastal city flooding, island nations at risk"),
    (2.0, "Catastrophic: many coastal cities partially submerged"),
    (5.0, "Extreme: massive land loss, hundreds of millions displaced"),
)
IMPACT_BEYOND = "Civilization-altering: major population centers underwater"

# Histogram severity bands keyed by bin midpoint (meters, exclusive upper bound)
SEVERITY_BANDS: tuple[tuple[float, str], ...] = (
    (0.3, "low"),
    (0.6, "moderate"),
    (1.0, "high"),
)
SEVERITY_BEYOND = "severe"

"""
Scenario projection constants.
Warming anchors follow IPCC AR6 WG1 SSP assessed ranges (best estimate,
degrees C above 1850-1900).
"""

PROJECTION_YEARS: tuple[int, ...] = (2030, 2050, 2100)

SSP_SCENARIOS: dict[str, dict] = {
    "ssp126": {
        "label": "SSP1-2.6",
        "description": "Strong mitigation, lower warming pathway",
        "temperatures_by_year": {2030: 1.5, 2050: 1.8, 2100: 2.0},
    },
    "ssp245": {
        "label": "SSP2-4.5",
        "description": "Intermediate emissions pathway",
        "temperatures_by_year": {2030: 1.6, 2050: 2.2, 2100: 2.9},
    },
    "ssp585": {
        "label": "SSP5-8.5",
        "description": "High emissions, high warming pathway",
        "temperatures_by_year": {2030: 1.8, 2050: 2.7, 2100: 4.4},
    },
}

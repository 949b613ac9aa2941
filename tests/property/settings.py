# tests/property/settings.py
"""Standardized Hypothesis settings profiles for property tests.

Import these instead of using inline @settings(max_examples=...).

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(record=records())
    @STANDARD_SETTINGS
    def test_something(record):
        ...

Tiers:
- DETERMINISM_SETTINGS: 500 examples - serialization round trips and output stability
- STANDARD_SETTINGS: 100 examples - regular property tests
- QUICK_SETTINGS: 20 examples - simple rejection tests
"""

from hypothesis import settings

# Baselines are stored as rendered text; rendering must be reproducible
DETERMINISM_SETTINGS = settings(max_examples=500)

STANDARD_SETTINGS = settings(max_examples=100)

QUICK_SETTINGS = settings(max_examples=20)

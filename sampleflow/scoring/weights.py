# sampleflow/scoring/weights.py

"""
Centralized factor weights.

This file must NOT import from any other scoring modules.
Assessors stamp these weights on the factors they emit and the aggregator
reads them back from the factors, so this module is the only place they live.
"""

MAJOR_LABEL_WEIGHT = 3.0
INDEPENDENT_LABEL_WEIGHT = 2.0
AGE_WEIGHT = 2.0
POPULARITY_WEIGHT = 2.5
PRIOR_USAGE_WEIGHT = 2.5

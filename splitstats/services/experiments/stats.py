import math
from typing import Optional, Union

from scipy import stats as scipy_stats

from splitstats.config import get_settings

# Returned instead of a number when a comparison has no meaningful z-score
NOT_AVAILABLE = "N/A"

ZScore = Union[float, str]

CONFIDENCE_THRESHOLDS = (
    (2.58, "99.0% confidence"),
    (1.96, "95.0% confidence"),
    (1.65, "90.0% confidence"),
)
INSUFFICIENT_CONFIDENCE = "Insufficient confidence"


def calculate_pooled_proportion(p_a: float, n_a: int, p_c: float, n_c: int) -> float:
    total = n_a + n_c
    if total == 0:
        return 0.0
    return (p_a * n_a + p_c * n_c) / total


def calculate_standard_error(p_a: float, n_a: int, p_c: float, n_c: int) -> float:
    p_pooled = calculate_pooled_proportion(p_a, n_a, p_c, n_c)
    return math.sqrt(p_pooled * (1 - p_pooled) * (1 / n_a + 1 / n_c))


def calculate_z_score(p_a: float, n_a: int, p_c: float, n_c: int) -> ZScore:
    """Two-proportion z statistic of a candidate (a) against a control (c).

    Args:
        p_a: conversion rate of the candidate
        n_a: participants of the candidate
        p_c: conversion rate of the control
        n_c: participants of the control

    Returns:
        The z-score, or NOT_AVAILABLE when a conversion rate exceeds 1,
        when either sample is empty, or when the pooled standard error is
        zero (both arms at 0% or both at 100%).
    """
    # can't calculate a z-score for P(x) > 1
    if p_a > 1 or p_c > 1:
        return NOT_AVAILABLE

    if n_a <= 0 or n_c <= 0:
        return NOT_AVAILABLE

    se = calculate_standard_error(p_a, n_a, p_c, n_c)
    if se == 0:
        return NOT_AVAILABLE

    return (p_a - p_c) / se


def calculate_p_value(z_score: ZScore) -> ZScore:
    if isinstance(z_score, str):
        return NOT_AVAILABLE

    # Two-tailed p-value
    return float(2 * (1 - scipy_stats.norm.cdf(abs(z_score))))


def confidence_level(z_score: ZScore) -> str:
    if isinstance(z_score, str):
        return z_score

    z = round(abs(z_score), 3)
    for threshold, label in CONFIDENCE_THRESHOLDS:
        if z >= threshold:
            return label
    return INSUFFICIENT_CONFIDENCE


def is_significant(z_score: ZScore, alpha: Optional[float] = None) -> bool:
    if alpha is None:
        alpha = get_settings().SIGNIFICANCE_LEVEL

    p_value = calculate_p_value(z_score)
    if isinstance(p_value, str):
        return False
    return p_value <= alpha

"""
Experiment statistics for A/B testing.

This module provides:
- Alternatives with atomic participation and per-goal completion counters
- Two-proportion z-scores against the experiment's control
- Experiment lookup (goals, control) through a pluggable catalog
"""

from splitstats.services.experiments.alternative import Alternative
from splitstats.services.experiments.catalog import (
    ExperimentCatalog,
    ExperimentDefinition,
    InMemoryExperimentCatalog,
)
from splitstats.services.experiments.exceptions import (
    ExperimentNotFound,
    InvalidAlternative,
    MalformedAuxiliaryData,
    SplitStatsError,
)
from splitstats.services.experiments.naming import PlainName, WeightedName
from splitstats.services.experiments.stats import (
    NOT_AVAILABLE,
    calculate_p_value,
    calculate_z_score,
    confidence_level,
    is_significant,
)

__all__ = [
    "Alternative",
    "ExperimentCatalog",
    "ExperimentDefinition",
    "InMemoryExperimentCatalog",
    "SplitStatsError",
    "InvalidAlternative",
    "MalformedAuxiliaryData",
    "ExperimentNotFound",
    "PlainName",
    "WeightedName",
    "NOT_AVAILABLE",
    "calculate_z_score",
    "calculate_p_value",
    "confidence_level",
    "is_significant",
]

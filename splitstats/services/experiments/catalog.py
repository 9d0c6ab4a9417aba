"""
Experiment lookup.

Alternatives resolve their experiment (goals and control) through an
ExperimentCatalog. Production deployments plug in whatever holds their
experiment configuration; InMemoryExperimentCatalog covers tests and
single-process setups.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol

import structlog

from splitstats.core.store import CounterStore
from splitstats.services.experiments.alternative import Alternative
from splitstats.services.experiments.exceptions import ExperimentNotFound

logger = structlog.get_logger("experiment_catalog")


@dataclass
class ExperimentDefinition:
    name: str
    alternatives: list[Alternative]
    goals: list[str] = field(default_factory=list)

    @property
    def control(self) -> Alternative:
        # First declared alternative is the control
        return self.alternatives[0]

    def alternative(self, name: str) -> Alternative:
        for alt in self.alternatives:
            if alt.name == name:
                return alt
        raise KeyError(name)


class ExperimentCatalog(Protocol):
    def find_experiment(self, name: str) -> ExperimentDefinition: ...


class InMemoryExperimentCatalog:
    def __init__(self, store: CounterStore):
        self.store = store
        self._experiments: dict[str, ExperimentDefinition] = {}

    def register(
        self,
        name: str,
        alternatives: Iterable[Any],
        goals: Iterable[str] = (),
    ) -> ExperimentDefinition:
        built = [Alternative(raw, name, self.store, self) for raw in alternatives]
        if not built:
            raise ValueError("Experiment must have at least one alternative")

        names = [alt.name for alt in built]
        if len(names) != len(set(names)):
            raise ValueError("Alternative names must be unique")

        definition = ExperimentDefinition(name=name, alternatives=built, goals=list(goals))
        self._experiments[name] = definition

        logger.info(
            "experiment_registered",
            experiment=name,
            alternatives=names,
            goals=definition.goals,
        )
        return definition

    def find_experiment(self, name: str) -> ExperimentDefinition:
        try:
            return self._experiments[name]
        except KeyError:
            raise ExperimentNotFound(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._experiments

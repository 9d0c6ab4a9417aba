"""
Alternatives (variants) of an experiment and their counters.

Every alternative owns one hash in the counter store, keyed
"<experiment_name>:<name>", with these fields:

- participant_count
- completed_count, completed_count:<goal>
- p_winner, p_winner:<goal>
- recorded_info (JSON object)

Counters are incremented with the store's atomic increment so concurrent
requests never lose updates. The set_* methods and record_extra_info
overwrite and are last-writer-wins. Reads of different fields are
independent round trips, so conversion_rate, unfinished_count and summary
can observe a torn view while other requests are writing.
"""

import json
import numbers
from typing import TYPE_CHECKING, Any, Optional

import structlog

from splitstats.core.store import CounterStore
from splitstats.models.schemas import AlternativeSummary
from splitstats.services.experiments.exceptions import MalformedAuxiliaryData
from splitstats.services.experiments.naming import (
    NameSpec,
    parse_alternative_name,
    validate_alternative_name,
)
from splitstats.services.experiments.stats import (
    NOT_AVAILABLE,
    ZScore,
    calculate_z_score,
    confidence_level,
)

if TYPE_CHECKING:
    from splitstats.services.experiments.catalog import ExperimentCatalog, ExperimentDefinition

logger = structlog.get_logger("alternative")

PARTICIPANT_COUNT = "participant_count"
COMPLETED_COUNT = "completed_count"
P_WINNER = "p_winner"
RECORDED_INFO = "recorded_info"


def completed_field(goal: Optional[str] = None) -> str:
    if goal is None:
        return COMPLETED_COUNT
    return f"{COMPLETED_COUNT}:{goal}"


def p_winner_field(goal: Optional[str] = None) -> str:
    if goal is None:
        return P_WINNER
    return f"{P_WINNER}:{goal}"


def _to_int(raw: Optional[str]) -> int:
    if raw is None:
        return 0
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return 0


def _to_float(raw: Optional[str]) -> float:
    if raw is None:
        return 0.0
    try:
        return float(raw)
    except ValueError:
        return 0.0


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def decode_recorded_info(data: Optional[str]) -> dict[str, Any]:
    """Decode the stored recorded_info text.

    Absent or near-empty text (reset writes "") decodes to an empty dict.

    Raises:
        MalformedAuxiliaryData: if the text is not a JSON object
    """
    if not data or len(data) <= 1:
        return {}

    try:
        decoded = json.loads(data)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and over-long integer literals
        raise MalformedAuxiliaryData(f"recorded_info is not valid JSON: {e}") from e

    if not isinstance(decoded, dict):
        raise MalformedAuxiliaryData(
            f"recorded_info must be a JSON object, got {type(decoded).__name__}"
        )
    return decoded


class Alternative:
    """
    One arm of an experiment.

    Args:
        name: plain name ("red") or single-entry weighted mapping ({"red": 2})
        experiment_name: experiment this alternative belongs to
        store: CounterStore holding the counters
        catalog: ExperimentCatalog used to resolve goals and the control

    Raises:
        InvalidAlternative: if name is malformed
    """

    def __init__(
        self,
        name: Any,
        experiment_name: str,
        store: CounterStore,
        catalog: "ExperimentCatalog",
    ):
        self.name_spec: NameSpec = parse_alternative_name(name)
        self.experiment_name = experiment_name
        self.store = store
        self.catalog = catalog
        self.recorded_info: Optional[dict[str, Any]] = None

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"Alternative(name={self.name!r}, experiment_name={self.experiment_name!r}, "
            f"weight={self.weight!r})"
        )

    @property
    def name(self) -> str:
        return self.name_spec.name

    @property
    def weight(self) -> float:
        return self.name_spec.weight

    @property
    def key(self) -> str:
        return f"{self.experiment_name}:{self.name}"

    @property
    def experiment(self) -> "ExperimentDefinition":
        return self.catalog.find_experiment(self.experiment_name)

    @property
    def goals(self) -> list[str]:
        return list(self.experiment.goals)

    # Participation

    @property
    def participant_count(self) -> int:
        return _to_int(self.store.hash_get(self.key, PARTICIPANT_COUNT))

    @participant_count.setter
    def participant_count(self, count: int) -> None:
        self.set_participant_count(count)

    def set_participant_count(self, count: int) -> None:
        self.store.hash_set(self.key, PARTICIPANT_COUNT, int(count))

    def increment_participation(self) -> int:
        return self.store.hash_increment_by(self.key, PARTICIPANT_COUNT, 1)

    # Completion

    def completed_count(self, goal: Optional[str] = None) -> int:
        return _to_int(self.store.hash_get(self.key, completed_field(goal)))

    def set_completed_count(self, count: int, goal: Optional[str] = None) -> None:
        self.store.hash_set(self.key, completed_field(goal), int(count))

    def increment_completion(self, goal: Optional[str] = None) -> int:
        return self.store.hash_increment_by(self.key, completed_field(goal), 1)

    def all_completed_count(self) -> int:
        # The default bucket is counted in addition to every goal bucket
        total = self.completed_count()
        for goal in self.goals:
            total += self.completed_count(goal)
        return total

    def unfinished_count(self) -> int:
        return self.participant_count - self.all_completed_count()

    def conversion_rate(self, goal: Optional[str] = None) -> float:
        participants = self.participant_count
        if participants == 0:
            return 0.0
        return self.completed_count(goal) / participants

    # Winner probability

    def p_winner(self, goal: Optional[str] = None) -> float:
        return _to_float(self.store.hash_get(self.key, p_winner_field(goal)))

    def set_p_winner(self, prob: float, goal: Optional[str] = None) -> None:
        self.store.hash_set(self.key, p_winner_field(goal), float(prob))

    # Significance

    def is_control(self) -> bool:
        return self.experiment.control.name == self.name

    def z_score(self, goal: Optional[str] = None) -> ZScore:
        """z-score of this alternative against the experiment's control.

        Returns NOT_AVAILABLE when this alternative is the control.
        """
        control = self.experiment.control
        if control.name == self.name:
            return NOT_AVAILABLE

        p_a = self.conversion_rate(goal)
        p_c = control.conversion_rate(goal)

        n_a = self.participant_count
        n_c = control.participant_count

        return calculate_z_score(p_a, n_a, p_c, n_c)

    def summary(self, goal: Optional[str] = None) -> AlternativeSummary:
        z_score = self.z_score(goal)
        completed = self.completed_count(goal)
        participants = self.participant_count

        return AlternativeSummary(
            experiment_name=self.experiment_name,
            name=self.name,
            goal=goal,
            weight=self.weight,
            is_control=self.is_control(),
            participant_count=participants,
            completed_count=completed,
            unfinished_count=self.unfinished_count(),
            conversion_rate=completed / participants if participants else 0.0,
            z_score=z_score,
            confidence=confidence_level(z_score),
            p_winner=self.p_winner(goal),
        )

    # Recorded info

    def extra_info(self) -> dict[str, Any]:
        data = self.store.hash_get(self.key, RECORDED_INFO)
        try:
            return decode_recorded_info(data)
        except MalformedAuxiliaryData as e:
            logger.warning(
                "recorded_info_unreadable",
                experiment=self.experiment_name,
                alternative=self.name,
                error=str(e),
            )
            return {}

    def record_extra_info(self, key: str, value: Any = 1) -> None:
        self.recorded_info = self.extra_info()

        if _is_number(value):
            current = self.recorded_info.get(key, 0)
            if not _is_number(current):
                current = 0
            self.recorded_info[key] = current + value
        else:
            self.recorded_info[key] = value

        self.store.hash_set(self.key, RECORDED_INFO, json.dumps(self.recorded_info))

    # Lifecycle

    def validate(self) -> None:
        """Raises InvalidAlternative if the name spec is malformed."""
        validate_alternative_name(self.name_spec)

    def save(self) -> None:
        self.validate()

        self.store.hash_set_if_absent(self.key, PARTICIPANT_COUNT, 0)
        self.store.hash_set_if_absent(self.key, COMPLETED_COUNT, 0)
        self.store.hash_set_if_absent(self.key, P_WINNER, self.p_winner())
        self.store.hash_set_if_absent(self.key, RECORDED_INFO, json.dumps(self.recorded_info or {}))

        logger.info("alternative_saved", experiment=self.experiment_name, alternative=self.name)

    def reset(self) -> None:
        # Resolve goals before writing so a failed lookup leaves the record intact
        goals = self.goals

        self.store.hash_multi_set(
            self.key,
            {PARTICIPANT_COUNT: 0, COMPLETED_COUNT: 0, RECORDED_INFO: ""},
        )
        for goal in goals:
            self.store.hash_set(self.key, completed_field(goal), 0)

        logger.info("alternative_reset", experiment=self.experiment_name, alternative=self.name)

    def delete(self) -> None:
        self.store.delete(self.key)

        logger.info("alternative_deleted", experiment=self.experiment_name, alternative=self.name)

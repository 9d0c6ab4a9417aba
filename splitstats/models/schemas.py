from typing import Optional, Union

from pydantic import BaseModel, Field


class AlternativeSummary(BaseModel):
    experiment_name: str
    name: str
    goal: Optional[str] = None
    weight: float = 1.0
    is_control: bool
    participant_count: int
    completed_count: int
    unfinished_count: int  # Not clamped; negative if counters disagree
    conversion_rate: float = Field(..., description="Completed / participants, 0.0 when empty")
    z_score: Union[float, str]  # "N/A" when there is nothing to compare
    confidence: str
    p_winner: float = 0.0

"""
Gutory Models - Daily Log
One row of the daily_logs table per user per calendar day
"""

import math
from datetime import date
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gutory.utils.errors import ValidationError

GUT_SYMPTOM_METRICS = (
    "bloating",
    "abdominal_pain",
    "gas",
    "stool_quality",
    "nausea_reflux",
)

WELLBEING_METRICS = (
    "energy_level",
    "sleep_quality",
    "stress_level",
    "brain_fog",
    "mood",
    "skin_quality",
    "water_intake",
    "exercise_level",
)

ALL_METRICS = GUT_SYMPTOM_METRICS + WELLBEING_METRICS

METRIC_LABELS = {
    "bloating": "Bloating",
    "abdominal_pain": "Abdominal Pain",
    "gas": "Gas",
    "stool_quality": "Stool Quality",
    "nausea_reflux": "Nausea / Reflux",
}

MetricValue = Optional[int]


def _metric_field(description: str) -> Any:
    return Field(None, ge=0, le=10, description=description)


class DailyLog(BaseModel):
    """A user's entry for one day; natural key is (user_id, log_date)"""

    model_config = ConfigDict(extra="ignore", frozen=True)

    user_id: Optional[UUID] = None
    log_date: date

    meals_text: Optional[str] = None

    # Gut symptoms
    bloating: MetricValue = _metric_field("Bloating severity")
    abdominal_pain: MetricValue = _metric_field("Abdominal pain severity")
    gas: MetricValue = _metric_field("Gas severity")
    stool_quality: MetricValue = _metric_field("Stool changes severity")
    nausea_reflux: MetricValue = _metric_field("Nausea / reflux severity")

    # Wellbeing
    energy_level: MetricValue = _metric_field("Energy")
    sleep_quality: MetricValue = _metric_field("Sleep quality")
    stress_level: MetricValue = _metric_field("Stress, stored as 10 - calmness")

    # Reserved
    brain_fog: MetricValue = _metric_field("Brain fog")
    mood: MetricValue = _metric_field("Mood")
    skin_quality: MetricValue = _metric_field("Skin quality")
    water_intake: MetricValue = _metric_field("Water intake")
    exercise_level: MetricValue = _metric_field("Exercise level")

    def metric(self, name: str) -> MetricValue:
        """Get a metric value by column name"""
        if name not in ALL_METRICS:
            raise ValidationError(f"Unknown metric: {name}", details={"metric": name})
        return getattr(self, name)

    def gut_metrics(self) -> Dict[str, int]:
        """Gut symptom metrics that were filled in"""
        return {
            name: getattr(self, name)
            for name in GUT_SYMPTOM_METRICS
            if getattr(self, name) is not None
        }

    def to_payload(self) -> Dict[str, Any]:
        """JSON row shape; absent values are omitted"""
        return self.model_dump(mode="json", exclude_none=True)


def _round_slider(value: float) -> int:
    # half away from zero; slider values are never negative
    return int(math.floor(value + 0.5))


def _clamp(value: float) -> int:
    return int(max(0, min(10, value)))


def calmness_to_stress(calmness: float) -> int:
    """Calmness 0-10 (high = calmer) to stored stress 0-10 (high = more stressed)"""
    return _clamp(10 - _round_slider(calmness))


def stress_to_calmness(stress: int) -> int:
    return 10 - _clamp(stress)


class DailyLogDraft(BaseModel):
    """Values of the daily entry form before they are saved"""

    meals_text: str = ""

    bloating: float = Field(0, ge=0, le=10)
    abdominal_pain: float = Field(0, ge=0, le=10)
    gas: float = Field(0, ge=0, le=10)
    stool_quality: float = Field(0, ge=0, le=10)
    nausea_reflux: float = Field(0, ge=0, le=10)

    energy_level: float = Field(5, ge=0, le=10)
    calmness: float = Field(5, ge=0, le=10)
    sleep_quality: float = Field(5, ge=0, le=10)

    def to_daily_log(self, user_id: UUID, log_date: date) -> DailyLog:
        """Build the row to upsert for this day"""
        meals = self.meals_text.strip()
        return DailyLog(
            user_id=user_id,
            log_date=log_date,
            meals_text=meals or None,
            bloating=_round_slider(self.bloating),
            abdominal_pain=_round_slider(self.abdominal_pain),
            gas=_round_slider(self.gas),
            stool_quality=_round_slider(self.stool_quality),
            nausea_reflux=_round_slider(self.nausea_reflux),
            energy_level=_round_slider(self.energy_level),
            sleep_quality=_round_slider(self.sleep_quality),
            stress_level=calmness_to_stress(self.calmness),
        )

    @classmethod
    def from_daily_log(cls, log: DailyLog) -> "DailyLogDraft":
        """Pre-fill the form from a saved day; missing values keep their defaults"""
        values: Dict[str, Any] = {}
        if log.meals_text:
            values["meals_text"] = log.meals_text
        for name in GUT_SYMPTOM_METRICS + ("energy_level", "sleep_quality"):
            value = getattr(log, name)
            if value is not None:
                values[name] = float(value)
        if log.stress_level is not None:
            values["calmness"] = float(stress_to_calmness(log.stress_level))
        return cls(**values)

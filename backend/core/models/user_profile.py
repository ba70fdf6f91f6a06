"""
Health profile used to personalize scoring.
Owned by the caller; the engine only reads it. Updates merge without
overwriting fields that were not provided.
"""
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Union

PREGNANT = "pregnant"
NOT_PREGNANT = "not_pregnant"
PREGNANCY_STATUS_CHOICES = [NOT_PREGNANT, PREGNANT]

# Dietary tags the scorer reacts to; others are stored but ignored
DIETARY_PREFERENCE_CHOICES = ["diabetic", "low_sodium", "vegan", "vegetarian", "gluten_free"]

DEFAULT_AGE = 30


def _split_preferences(value: Union[str, List[str], None]) -> List[str]:
    """Accept a list or a comma-separated string (as typed into a form)."""
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass
class UserProfile:
    age: int = DEFAULT_AGE
    dietary_preferences: List[str] = field(default_factory=list)
    pregnancy_status: str = NOT_PREGNANT

    def __post_init__(self):
        if self.age < 0:
            raise ValueError(f"age must be >= 0, got {self.age}")

    @property
    def is_child(self) -> bool:
        return self.age < 18

    @property
    def is_pregnant(self) -> bool:
        return self.pregnancy_status == PREGNANT

    def update_merge(
        self,
        age: Optional[int] = None,
        dietary_preferences: Union[str, List[str], None] = None,
        pregnancy_status: Optional[str] = None,
        **_kwargs,
    ) -> None:
        """Update only provided fields; omitted fields keep their value."""
        if age is not None:
            age = int(age)
            if age < 0:
                raise ValueError(f"age must be >= 0, got {age}")
            self.age = age
        if dietary_preferences is not None:
            self.dietary_preferences = _split_preferences(dietary_preferences)
        if pregnancy_status is not None:
            self.pregnancy_status = pregnancy_status

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "UserProfile":
        """Load from dict; accepts snake_case or the camelCase keys older clients send."""
        data = data or {}
        age = data.get("age", DEFAULT_AGE)
        prefs = data.get("dietary_preferences")
        if prefs is None:
            prefs = data.get("dietaryPreferences")
        status = data.get("pregnancy_status") or data.get("pregnancyStatus") or NOT_PREGNANT
        return cls(
            age=int(age) if age is not None else DEFAULT_AGE,
            dietary_preferences=_split_preferences(prefs),
            pregnancy_status=status,
        )

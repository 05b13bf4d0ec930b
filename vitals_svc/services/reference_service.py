"""
Read-only access to the reference catalog with optional filters.
"""
import logging
from typing import Optional, Tuple

from core.exceptions import NotFoundError, ValidationError
from core.reference_data import (
    EXERCISE_CATEGORIES,
    EXERCISE_INTENSITIES,
    FOOD_CATEGORIES,
    TIP_CATEGORIES,
    TIP_IMPORTANCE,
    Exercise,
    Food,
    HeartRateReference,
    HeartTip,
    ReferenceCatalog,
)

logger = logging.getLogger(__name__)


def _check_filter(name: str, value: Optional[str], allowed: Tuple[str, ...]) -> None:
    if value is not None and value not in allowed:
        raise ValidationError(
            f"Unknown {name} '{value}'",
            field=name,
            allowed=list(allowed)
        )


class ReferenceService:
    """
    Serves exercises, foods, heart tips and heart-rate bands.

    Filters narrow a catalog in its stored order; an unknown filter value
    is a ValidationError rather than an empty list.
    """

    def __init__(self, catalog: ReferenceCatalog):
        self._catalog = catalog

    def list_exercises(
        self,
        category: Optional[str] = None,
        intensity: Optional[str] = None
    ) -> Tuple[Exercise, ...]:
        _check_filter("category", category, EXERCISE_CATEGORIES)
        _check_filter("intensity", intensity, EXERCISE_INTENSITIES)
        return tuple(
            e for e in self._catalog.exercises
            if (category is None or e.category == category)
            and (intensity is None or e.intensity == intensity)
        )

    def list_foods(self, category: Optional[str] = None) -> Tuple[Food, ...]:
        _check_filter("category", category, FOOD_CATEGORIES)
        return tuple(f for f in self._catalog.foods if category is None or f.category == category)

    def list_heart_tips(
        self,
        category: Optional[str] = None,
        importance: Optional[str] = None
    ) -> Tuple[HeartTip, ...]:
        _check_filter("category", category, TIP_CATEGORIES)
        _check_filter("importance", importance, TIP_IMPORTANCE)
        return tuple(
            t for t in self._catalog.heart_tips
            if (category is None or t.category == category)
            and (importance is None or t.importance == importance)
        )

    def list_heart_rate_references(self) -> Tuple[HeartRateReference, ...]:
        return self._catalog.heart_rate_references

    def heart_rate_reference_for_age(self, age: float) -> HeartRateReference:
        """
        Find the heart-rate band that covers an age in years.

        Raises:
            ValidationError: If age is negative.
            NotFoundError: If no band covers the age.
        """
        if age < 0:
            raise ValidationError("Age must not be negative", field="age", value=age)
        for band in self._catalog.heart_rate_references:
            if band.covers(age):
                return band
        logger.warning("No heart-rate band covers age", extra={"age": age})
        raise NotFoundError(detail="No heart-rate reference for this age", age=age)

"""
Static reference catalog - exercises, foods, heart tips and heart-rate bands.

This module provides:
- YAML-based catalog loading and validation
- Frozen dataclasses for every catalog entry
- Read-only access to the loaded catalog

YAML access is encapsulated here - no other module should read
reference_data.yaml directly. The file is parsed once per process.

Usage:
    from core.reference_data import get_catalog

    catalog = get_catalog()
    catalog.exercises[0].name          # "Brisk Walking"
    catalog.heart_rate_references[-1]  # Seniors (65+ years)
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

EXERCISE_CATEGORIES = ("cardio", "strength", "flexibility", "balance")
EXERCISE_INTENSITIES = ("low", "moderate", "high")
FOOD_CATEGORIES = ("fruits", "vegetables", "proteins", "grains", "dairy", "nuts")
TIP_CATEGORIES = ("walking", "exercise", "diet", "monitoring", "lifestyle")
TIP_IMPORTANCE = ("critical", "important", "helpful")


# =============================================================================
# CATALOG ENTRIES
# =============================================================================

@dataclass(frozen=True)
class Exercise:
    id: int
    name: str
    category: str
    description: str
    benefits: Tuple[str, ...]
    duration: str
    intensity: str
    heart_health_rating: int
    calories_burned: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "benefits": list(self.benefits),
            "duration": self.duration,
            "intensity": self.intensity,
            "heartHealthRating": self.heart_health_rating,
            "caloriesBurned": self.calories_burned,
        }


@dataclass(frozen=True)
class Nutrients:
    protein: str
    fiber: str
    vitamins: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"protein": self.protein, "fiber": self.fiber, "vitamins": list(self.vitamins)}


@dataclass(frozen=True)
class Food:
    id: int
    name: str
    category: str
    description: str
    benefits: Tuple[str, ...]
    calories: int
    nutrients: Nutrients
    heart_healthy: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "benefits": list(self.benefits),
            "calories": self.calories,
            "nutrients": self.nutrients.to_dict(),
            "heartHealthy": self.heart_healthy,
        }


@dataclass(frozen=True)
class HeartTip:
    id: int
    title: str
    description: str
    category: str
    importance: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "importance": self.importance,
        }


@dataclass(frozen=True)
class HeartRateReference:
    """
    Resting, maximum and moderate-exercise heart-rate ranges for an age band.

    ``min_age`` is inclusive and ``max_age`` exclusive, both in years;
    ``max_age`` is None for the open-ended oldest band.
    """
    age_group: str
    min_age: float
    max_age: Optional[float]
    resting_min: int
    resting_max: int
    max_heart_rate: int
    moderate_min: int
    moderate_max: int

    def covers(self, age: float) -> bool:
        if age < self.min_age:
            return False
        return self.max_age is None or age < self.max_age

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ageGroup": self.age_group,
            "restingMin": self.resting_min,
            "restingMax": self.resting_max,
            "maxHeartRate": self.max_heart_rate,
            "moderateMin": self.moderate_min,
            "moderateMax": self.moderate_max,
        }


@dataclass(frozen=True)
class ReferenceCatalog:
    exercises: Tuple[Exercise, ...]
    foods: Tuple[Food, ...]
    heart_tips: Tuple[HeartTip, ...]
    heart_rate_references: Tuple[HeartRateReference, ...]


# =============================================================================
# YAML LOADING & VALIDATION
# =============================================================================

def _get_data_path() -> Path:
    """Get the path to the reference catalog file."""
    return Path(__file__).parent / "reference_data.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load and parse the catalog file.

    Raises:
        FileNotFoundError: If the file is missing
        yaml.YAMLError: If YAML parsing fails
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error("Reference data file not found", extra={"path": str(path)})
        raise
    except yaml.YAMLError as e:
        logger.error("Failed to parse reference data", extra={"path": str(path), "error": str(e)})
        raise


def _require(raw: Any, where: str, fields: Tuple[str, ...]) -> None:
    if not isinstance(raw, dict):
        raise ValueError(f"{where} must be a mapping, got {type(raw).__name__}")
    for name in fields:
        if name not in raw:
            raise ValueError(f"{where} is missing required field: '{name}'")


def _section(config: Dict[str, Any], name: str) -> List[Any]:
    entries = config.get(name) or []
    if not isinstance(entries, list):
        raise ValueError(f"{name} must be a list, got {type(entries).__name__}")
    return entries


def _check_choice(raw: Dict[str, Any], section: str, index: int, name: str, allowed: Tuple[str, ...]) -> None:
    if raw[name] not in allowed:
        raise ValueError(
            f"{section}[{index}] has invalid {name} '{raw[name]}', expected one of {allowed}"
        )


def _parse_exercises(entries: List[Dict[str, Any]]) -> Tuple[Exercise, ...]:
    parsed = []
    for i, raw in enumerate(entries):
        _require(raw, f"exercises[{i}]", (
            "name", "category", "description", "benefits", "duration", "intensity", "heart_health_rating",
        ))
        _check_choice(raw, "exercises", i, "category", EXERCISE_CATEGORIES)
        _check_choice(raw, "exercises", i, "intensity", EXERCISE_INTENSITIES)
        rating = raw["heart_health_rating"]
        if not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValueError(f"exercises[{i}] heart_health_rating must be an integer from 1 to 5")

        parsed.append(Exercise(
            id=i + 1,
            name=raw["name"],
            category=raw["category"],
            description=raw["description"],
            benefits=tuple(raw["benefits"]),
            duration=raw["duration"],
            intensity=raw["intensity"],
            heart_health_rating=rating,
            calories_burned=raw.get("calories_burned"),
        ))
    return tuple(parsed)


def _parse_foods(entries: List[Dict[str, Any]]) -> Tuple[Food, ...]:
    parsed = []
    for i, raw in enumerate(entries):
        _require(raw, f"foods[{i}]", (
            "name", "category", "description", "benefits", "calories", "nutrients",
        ))
        _check_choice(raw, "foods", i, "category", FOOD_CATEGORIES)
        nutrients = raw["nutrients"]
        _require(nutrients, f"foods[{i}].nutrients", ("protein", "fiber", "vitamins"))

        parsed.append(Food(
            id=i + 1,
            name=raw["name"],
            category=raw["category"],
            description=raw["description"],
            benefits=tuple(raw["benefits"]),
            calories=int(raw["calories"]),
            nutrients=Nutrients(
                protein=str(nutrients["protein"]),
                fiber=str(nutrients["fiber"]),
                vitamins=tuple(nutrients["vitamins"]),
            ),
            heart_healthy=bool(raw.get("heart_healthy", True)),
        ))
    return tuple(parsed)


def _parse_heart_tips(entries: List[Dict[str, Any]]) -> Tuple[HeartTip, ...]:
    parsed = []
    for i, raw in enumerate(entries):
        _require(raw, f"heart_tips[{i}]", ("title", "description", "category", "importance"))
        _check_choice(raw, "heart_tips", i, "category", TIP_CATEGORIES)
        _check_choice(raw, "heart_tips", i, "importance", TIP_IMPORTANCE)
        parsed.append(HeartTip(
            id=i + 1,
            title=raw["title"],
            description=raw["description"],
            category=raw["category"],
            importance=raw["importance"],
        ))
    return tuple(parsed)


def _parse_heart_rate_references(entries: List[Dict[str, Any]]) -> Tuple[HeartRateReference, ...]:
    parsed = []
    for i, raw in enumerate(entries):
        _require(raw, f"heart_rate_references[{i}]", (
            "age_group", "min_age", "resting_min", "resting_max",
            "max_heart_rate", "moderate_min", "moderate_max",
        ))
        max_age = raw.get("max_age")
        if max_age is not None and max_age <= raw["min_age"]:
            raise ValueError(f"heart_rate_references[{i}] max_age must be greater than min_age")

        parsed.append(HeartRateReference(
            age_group=raw["age_group"],
            min_age=float(raw["min_age"]),
            max_age=float(max_age) if max_age is not None else None,
            resting_min=raw["resting_min"],
            resting_max=raw["resting_max"],
            max_heart_rate=raw["max_heart_rate"],
            moderate_min=raw["moderate_min"],
            moderate_max=raw["moderate_max"],
        ))

    # Bands must be sorted and contiguous so every age maps to exactly one band
    for previous, current in zip(parsed, parsed[1:]):
        if previous.max_age != current.min_age:
            raise ValueError(
                f"Heart-rate band '{current.age_group}' does not start where "
                f"'{previous.age_group}' ends"
            )
    return tuple(parsed)


def load_catalog(path: Optional[Path] = None) -> ReferenceCatalog:
    """
    Parse and validate a reference catalog file.

    Raises:
        ValueError: If the file is not shaped like a catalog, or an entry is
            missing fields or has an unknown enum value
    """
    config = _load_yaml(path or _get_data_path())
    if not isinstance(config, dict):
        raise ValueError(f"Reference catalog must be a mapping, got {type(config).__name__}")
    catalog = ReferenceCatalog(
        exercises=_parse_exercises(_section(config, "exercises")),
        foods=_parse_foods(_section(config, "foods")),
        heart_tips=_parse_heart_tips(_section(config, "heart_tips")),
        heart_rate_references=_parse_heart_rate_references(_section(config, "heart_rate_references")),
    )
    logger.info(
        "Reference catalog loaded",
        extra={
            "exercises": len(catalog.exercises),
            "foods": len(catalog.foods),
            "heart_tips": len(catalog.heart_tips),
            "heart_rate_references": len(catalog.heart_rate_references),
        }
    )
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> ReferenceCatalog:
    """The bundled catalog, loaded on first use and cached for the process lifetime."""
    return load_catalog()

from enum import Enum
import json
from typing import Any, NamedTuple, Self

from mealremix.domain.errors import MalformedResponse


MAX_INGREDIENTS = 20


class Ingredient(NamedTuple):
    name: str
    measure: str = ""

    def __str__(self) -> str:
        return f"{self.measure} {self.name}" if self.measure else self.name


def _text(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    return value.strip() if isinstance(value, str) else ""


def ingredients_from_mealdb(record: dict[str, Any]) -> tuple[Ingredient, ...]:
    """Read the numbered ingredient and measure slots, skipping empty ones."""
    ingredients: list[Ingredient] = []
    for i in range(1, MAX_INGREDIENTS + 1):
        name = _text(record, f"strIngredient{i}")
        if not name:
            continue
        ingredients.append(Ingredient(name, _text(record, f"strMeasure{i}")))
    return tuple(ingredients)


class Recipe:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        thumbnail_url: str = "",
        instructions: str = "",
        ingredients: tuple[Ingredient, ...] = (),
        raw: dict[str, Any] | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.thumbnail_url = thumbnail_url
        self.instructions = instructions
        self.ingredients = ingredients
        self.raw = {} if raw is None else raw

    @classmethod
    def from_mealdb(cls, record: Any) -> Self:
        if not isinstance(record, dict) or not _text(record, "strMeal"):
            raise MalformedResponse(f"Not a recipe record: {record!r}")
        instructions = record.get("strInstructions")
        return cls(
            id=_text(record, "idMeal"),
            name=record["strMeal"],
            thumbnail_url=_text(record, "strMealThumb"),
            instructions=instructions if isinstance(instructions, str) else "",
            ingredients=ingredients_from_mealdb(record),
            raw=record,
        )

    @property
    def category(self) -> str:
        return _text(self.raw, "strCategory")

    @property
    def area(self) -> str:
        return _text(self.raw, "strArea")

    @property
    def tags(self) -> list[str]:
        return [t.strip() for t in _text(self.raw, "strTags").split(",") if t.strip()]

    @property
    def youtube_url(self) -> str:
        return _text(self.raw, "strYoutube")

    @property
    def source_url(self) -> str:
        return _text(self.raw, "strSource")

    def to_json(self) -> str:
        return json.dumps(self.raw, indent=2, ensure_ascii=False)

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, name={self.name})>"

    def __str__(self) -> str:
        return self.name


class CurrentRecipe:
    """Owner of the one recipe currently on display."""

    def __init__(self, recipe: Recipe | None = None) -> None:
        self._recipe = recipe

    def get(self) -> Recipe | None:
        return self._recipe

    def set(self, recipe: Recipe) -> None:
        self._recipe = recipe


class Theme(Enum):
    CHEFS_SURPRISE = "Chef's Surprise"
    SPICY_TWIST = "Spicy Twist"
    VEGAN_REMIX = "Vegan Remix"
    WEEKNIGHT_QUICK = "Weeknight Quick"
    COMFORT_FOOD = "Comfort Food"

    @classmethod
    def default(cls) -> "Theme":
        return cls.CHEFS_SURPRISE

    @classmethod
    def parse(cls, value: str | None) -> "Theme":
        if not value:
            return cls.default()
        try:
            return cls(value)
        except ValueError:
            return cls.default()


class RemixRequest:
    def __init__(self, recipe: Recipe, theme: Theme = Theme.CHEFS_SURPRISE) -> None:
        self.recipe = recipe
        self.theme = theme

    def __repr__(self) -> str:
        return f"<RemixRequest(recipe={self.recipe.name}, theme={self.theme.value})>"

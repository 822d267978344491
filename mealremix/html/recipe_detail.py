import re

from jinja2 import Environment
from markupsafe import Markup, escape

from mealremix.domain.models import Recipe


def ingredients_of(recipe: Recipe) -> list[str]:
    """One "<measure> <ingredient>" line per ingredient, in recipe order."""
    return [str(i) for i in recipe.ingredients if i.name.strip()]


def instruction_lines(text: str) -> list[str]:
    return re.split(r"\r?\n", text) if text else []


class RecipeDetail:
    def __init__(
        self,
        recipe: Recipe,
        *,
        environment: Environment,
        template_name: str = "recipe-detail.html",
    ) -> None:
        self.recipe = recipe
        self.env = environment
        self.name = template_name

    @property
    def title(self) -> str:
        return self.recipe.name

    @property
    def image_url(self) -> str:
        return self.recipe.thumbnail_url

    @property
    def ingredients(self) -> list[str]:
        return ingredients_of(self.recipe)

    @property
    def instructions(self) -> Markup:
        return Markup("<br>").join(
            escape(line) for line in instruction_lines(self.recipe.instructions)
        )

    @property
    def metadata(self) -> list[str]:
        return [m for m in (self.recipe.category, self.recipe.area) if m] + [
            f"#{t}" for t in self.recipe.tags
        ]

    @property
    def links(self) -> list[tuple[str, str]]:
        candidates = (
            ("Watch video", self.recipe.youtube_url),
            ("Source", self.recipe.source_url),
        )
        return [
            (label, url)
            for label, url in candidates
            if url.startswith(("http://", "https://"))
        ]

    def render(self) -> str:
        return self.env.get_template(self.name).render(recipe=self)

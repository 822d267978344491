"""Small fragments swapped into the page's UI slots."""

from urllib.parse import urlencode

from jinja2 import Environment
from markupsafe import Markup

from mealremix.domain.errors import ConfigurationError
from mealremix.domain.models import Theme
from mealremix.domain.remix import RemixOutput


# Elements the page must provide for the routes to target.
UI_SLOTS = (
    "random-btn",
    "recipe-display",
    "remix-btn",
    "remix-theme",
    "remix-ws",
    "remix-output",
    "saved-recipes-container",
    "saved-recipes-list",
)


def message(env: Environment, text: str) -> str:
    return env.get_template("message.html").render(message=text)


def loading(env: Environment, text: str, url: str) -> str:
    """Placeholder that fetches `url` as soon as it is swapped in."""
    return env.get_template("loading.html").render(message=text, url=url)


def saved_list(env: Environment, names: list[str]) -> str:
    return env.get_template("saved-list.html").render(names=names)


def remix_connect(env: Environment, theme: Theme) -> str:
    params = urlencode({"theme": theme.value})
    return env.get_template("remix-ws.html").render(url=f"/remix?{params}")


def remix_output(env: Environment, output: RemixOutput, *, oob: bool = True) -> str:
    return env.get_template("remix-output.html").render(output=output, oob=oob)


def index(env: Environment, names: list[str]) -> str:
    return env.get_template("index.html").render(
        themes=list(Theme),
        default_theme=Theme.default(),
        saved=Markup(saved_list(env, names)),
        random_recipe=Markup(loading(env, "Loading...", "/recipes/random/content")),
    )


def check_ui_slots(env: Environment) -> None:
    page = index(env, ["placeholder"])
    missing = [slot for slot in UI_SLOTS if f'id="{slot}"' not in page]
    if missing:
        raise ConfigurationError(f"index.html is missing UI slots: {missing}")

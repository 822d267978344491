import contextlib
import functools
import logging
from typing import Any, AsyncIterator, Awaitable, Callable
from urllib.parse import urlencode

from databases import Database
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.routing import Route, WebSocketRoute
from starlette.websockets import WebSocket, WebSocketDisconnect

from mealremix.config import Config, Env
from mealremix.domain.errors import EmptyResult, MealRemixError, NetworkFailure
from mealremix.domain.llm_service import LLMService, openai_client_factory
from mealremix.domain.mealdb import RecipeFetcher, mealdb_client_factory
from mealremix.domain.models import CurrentRecipe, Theme
from mealremix.domain.remix import RemixOutput, RemixRequester
from mealremix.domain.saved import LocalStorage, SavedRecipes
from mealremix.html import environment, fragments
from mealremix.html.recipe_detail import RecipeDetail
from mealremix.logs import configure_logging


logger = logging.getLogger(__name__)


CONFIG = Config()


RANDOM_FAILED = "Sorry, couldn't load a recipe."
SEARCH_UNAVAILABLE = "Sorry, could not load that recipe right now."
SEARCH_NOT_FOUND = 'Could not find details for "{name}".'
SEARCH_FAILED = "Sorry, something went wrong while loading the saved recipe."
NO_NAME = "Pick a saved recipe to load."


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


@aHTMLResponse
async def homepage(request: Request) -> str:
    state = request.app.state
    return fragments.index(state.templates, await state.saved.list())


@aHTMLResponse
async def random_recipe(request: Request) -> str:
    return fragments.loading(
        request.app.state.templates, "Loading...", "/recipes/random/content"
    )


@aHTMLResponse
async def random_recipe_content(request: Request) -> str:
    state = request.app.state
    try:
        recipe = await state.fetcher.fetch_random()
    except MealRemixError as e:
        logger.error("Could not load a random recipe: %r", e)
        return fragments.message(state.templates, RANDOM_FAILED)
    state.current.set(recipe)
    return RecipeDetail(recipe, environment=state.templates).render()


@aHTMLResponse
async def search(request: Request) -> str:
    templates = request.app.state.templates
    name = request.query_params.get("s", "")
    if not name.strip():
        return fragments.message(templates, NO_NAME)
    url = f"/recipes/search/content?{urlencode({'s': name})}"
    return fragments.loading(templates, "Loading saved recipe...", url)


@aHTMLResponse
async def search_content(request: Request) -> str:
    state = request.app.state
    name = request.query_params.get("s", "")
    if not name.strip():
        return fragments.message(state.templates, NO_NAME)

    try:
        recipe = await state.fetcher.search_by_name(name)
    except EmptyResult:
        return fragments.message(state.templates, SEARCH_NOT_FOUND.format(name=name))
    except NetworkFailure as e:
        if e.status is None:
            logger.error("Error loading saved recipe by name: %r", e)
            return fragments.message(state.templates, SEARCH_FAILED)
        logger.error("MealDB search error: %s", e.status)
        return fragments.message(state.templates, SEARCH_UNAVAILABLE)
    except MealRemixError as e:
        logger.error("Error loading saved recipe by name: %r", e)
        return fragments.message(state.templates, SEARCH_FAILED)

    state.current.set(recipe)
    return RecipeDetail(recipe, environment=state.templates).render()


@aHTMLResponse
async def saved(request: Request) -> str:
    state = request.app.state
    return fragments.saved_list(state.templates, await state.saved.list())


@aHTMLResponse
async def save_current(request: Request) -> str:
    state = request.app.state
    recipe = state.current.get()
    if recipe is not None:
        await state.saved.add(recipe.name)
    return fragments.saved_list(state.templates, await state.saved.list())


@aHTMLResponse
async def delete_saved(request: Request) -> str:
    state = request.app.state
    await state.saved.remove(request.path_params["name"])
    return fragments.saved_list(state.templates, await state.saved.list())


@aHTMLResponse
async def remix_connect(request: Request) -> str:
    """Div holding the remix websocket connection."""
    theme = Theme.parse(request.query_params.get("theme"))
    return fragments.remix_connect(request.app.state.templates, theme)


async def remix(ws: WebSocket) -> None:
    state = ws.app.state
    theme = Theme.parse(ws.query_params.get("theme"))
    await ws.accept()

    async def display(output: RemixOutput) -> None:
        await ws.send_text(fragments.remix_output(state.templates, output))

    await state.requester.remix(state.current, theme, display)
    try:
        await ws.send_text('<div id="remix-ws" hx-swap-oob="true"></div>')
        await ws.close()
    except (WebSocketDisconnect, RuntimeError) as e:
        logger.info("Remix socket closed early: %r", e)


def create_app(
    settings: Config | None = None,
    *,
    fetcher: RecipeFetcher | None = None,
    llm: LLMService | None = None,
    db: Database | None = None,
) -> Starlette:
    settings = CONFIG if settings is None else settings

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        fragments.check_ui_slots(app.state.templates)
        await app.state.db.connect()
        await app.state.saved.storage.create()
        yield
        await app.state.db.disconnect()
        await app.state.fetcher.close()
        await app.state.llm.close()

    app = Starlette(
        debug=True if settings.env == Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/recipes/random", random_recipe),
            Route("/recipes/random/content", random_recipe_content),
            Route("/recipes/search", search),
            Route("/recipes/search/content", search_content),
            Route("/saved", saved, methods=["GET"]),
            Route("/saved", save_current, methods=["POST"]),
            Route("/saved/{name:path}", delete_saved, methods=["DELETE"]),
            Route("/remix-ws", remix_connect),
            WebSocketRoute("/remix", remix),
        ],
        lifespan=lifespan,
    )

    if fetcher is None:
        fetcher = RecipeFetcher(
            mealdb_client_factory(settings.mealdb_url, timeout=settings.timeout)
        )
    if llm is None:
        llm = LLMService(
            openai_client_factory(
                settings.openai_api_key,
                base_url=settings.openai_url,
                timeout=settings.timeout,
            ),
            model=settings.remix_model,
            temperature=settings.remix_temperature,
            max_tokens=settings.remix_max_tokens,
        )
    db = Database(settings.db_url) if db is None else db

    app.state.templates = environment(settings.html_dir)
    app.state.fetcher = fetcher
    app.state.llm = llm
    app.state.db = db
    app.state.saved = SavedRecipes(LocalStorage(db))
    app.state.current = CurrentRecipe()
    app.state.requester = RemixRequester(llm, interval=settings.tick_interval)
    return app


app = create_app()

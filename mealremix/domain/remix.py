"""Remix flow: Idle -> Loading -> Success | Failure, with an animated wait."""

from enum import Enum
import logging
from typing import Awaitable, Callable, NamedTuple

from mealremix.domain.errors import NetworkFailure
from mealremix.domain.llm_service import LLMService
from mealremix.domain.models import CurrentRecipe, RemixRequest, Theme
from mealremix.domain.ticker import Ticker


logger = logging.getLogger(__name__)


NO_RECIPE_MESSAGE = "No recipe loaded to remix. Try 'Random' first."
LOADING_MESSAGE = "Chef is mixing up your remix... 🍲✨"
UNAVAILABLE_MESSAGE = (
    "Oops — I couldn't get a remix right now. Please try again in a moment."
)
ERROR_MESSAGE = (
    "Oops — Something went wrong while remixing. Please try again in a moment."
)


class RemixState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class RemixOutput(NamedTuple):
    text: str
    # True for the remixed recipe itself, False for status messages.
    is_result: bool = False


Display = Callable[[RemixOutput], Awaitable[None]]


def loading_frame(count: int) -> str:
    return LOADING_MESSAGE + "." * (count % 4)


async def show(display: Display, output: RemixOutput) -> bool:
    """Display `output`, logging rather than raising when the screen is gone."""
    try:
        await display(output)
    except Exception:
        logger.exception("Could not display remix output.")
        return False
    return True


class RemixRequester:
    def __init__(self, llm: LLMService, *, interval: float = 0.35) -> None:
        self.llm = llm
        self.interval = interval
        self.state = RemixState.IDLE
        self._ticker: Ticker | None = None

    @property
    def ticking(self) -> bool:
        return self._ticker is not None and self._ticker.running

    async def _stop_ticker(self, ticker: Ticker | None = None) -> None:
        ticker = self._ticker if ticker is None else ticker
        if ticker is None:
            return
        await ticker.stop()
        if ticker is self._ticker:
            self._ticker = None

    async def remix(
        self,
        current: CurrentRecipe,
        theme: Theme,
        display: Display,
    ) -> str | None:
        recipe = current.get()
        if recipe is None:
            await show(display, RemixOutput(NO_RECIPE_MESSAGE))
            return None

        await self._stop_ticker()
        self.state = RemixState.LOADING
        await show(display, RemixOutput(LOADING_MESSAGE))

        async def tick(count: int) -> None:
            await display(RemixOutput(loading_frame(count)))

        ticker = Ticker(tick, interval=self.interval)
        self._ticker = ticker
        await ticker.start()

        text: str | None = None
        try:
            text = await self.llm.remix(RemixRequest(recipe, theme))
        except NetworkFailure as e:
            logger.error("OpenAI API error: %s %s", e.status, e.body)
            outcome, output = RemixState.FAILURE, RemixOutput(UNAVAILABLE_MESSAGE)
        except Exception:
            logger.exception("Remix error")
            outcome, output = RemixState.FAILURE, RemixOutput(ERROR_MESSAGE)
        else:
            outcome, output = RemixState.SUCCESS, RemixOutput(text, is_result=True)
        finally:
            latest = ticker is self._ticker
            await self._stop_ticker(ticker)

        # A newer remix owns the state once it has started.
        if latest:
            self.state = outcome
        await show(display, output)
        return text

from mealremix.domain.models import RemixRequest


REMIX_SYSTEM_PROMPT = (
    "You are a creative chef assistant. "
    "Produce a short, fun, creative, and totally doable remix of the given recipe. "
    "Highlight any changed ingredients and changed steps. "
    "Keep it concise and user-friendly."
)


REMIX_USER_PROMPT = """Remix theme: {theme}

Here is the raw recipe JSON from TheMealDB:

{recipe}

Please return a short remixed recipe with headings like "Remixed Recipe", \
"Changed Ingredients", and "Changed Instructions". \
Emphasize any substitutions or steps that changed."""


def remix_user_prompt(request: RemixRequest) -> str:
    return REMIX_USER_PROMPT.format(
        theme=request.theme.value,
        recipe=request.recipe.to_json(),
    )

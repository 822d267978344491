"""MealRemix: random recipes from TheMealDB, a saved list, and themed remixes.

The page is served by Starlette and driven by htmx. Run it with

    uvicorn mealremix.app:app
"""

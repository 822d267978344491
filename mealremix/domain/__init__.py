"""The MealRemix domain.

- A recipe comes from TheMealDB and is held as the single current recipe.
- Saved recipes are just names, kept in durable local storage.
- A remix is a one-off completion from a chat model given the current recipe
  and a theme. Nothing about it is stored.

The external services are passed in so they can be faked.
"""

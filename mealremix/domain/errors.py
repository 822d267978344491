class MealRemixError(Exception):
    pass


class NetworkFailure(MealRemixError):
    """Transport error or non-2xx response."""

    def __init__(
        self,
        message: str = "no recipe available",
        *,
        status: int | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class EmptyResult(MealRemixError):
    """Well formed response without any matching recipe."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(f"not found: {name}" if name else "not found")
        self.name = name


class MalformedResponse(MealRemixError):
    pass


class StorageFailure(MealRemixError):
    pass


class ConfigurationError(MealRemixError):
    pass

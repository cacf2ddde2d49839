"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class FetchFailure(ServiceError):
    """A search page could not be fetched or parsed.

    Transport errors, error statuses and malformed bodies all map here.
    """

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code

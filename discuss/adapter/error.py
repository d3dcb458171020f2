"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ContentServiceError(AdapterError):
    """Content service could not be reached or answered unexpectedly."""

    pass

"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class BadRequestError(InterfaceError):
    """Malformed body, or a type/action pair no handler serves."""

    pass

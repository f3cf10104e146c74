"""Monday client error types."""


class MondayError(Exception):
    """Base class for failures talking to the Monday.com API."""


class MondayConfigError(MondayError):
    """Required Monday configuration (token, board id) is missing."""


class MondayAPIError(MondayError):
    """Transport, HTTP status or GraphQL-level error from Monday."""


class MalformedUpstreamResponse(MondayError):
    """Monday answered, but not with the shape we asked for."""

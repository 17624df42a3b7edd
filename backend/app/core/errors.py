class InvalidSearchParams(ValueError):
    """Query parameters the caller has to fix and resubmit."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AssetLoadError(RuntimeError):
    """Reference data is missing or malformed; the service must not start."""

class UtiToolError(Exception):
    pass


class EnvironmentFailure(UtiToolError):
    """An external tool could not be run or exited with a non-zero status."""

    def __init__(self, message, status=1):
        super().__init__(message)
        self.status = status or 1


class SerializationFailure(UtiToolError):
    pass

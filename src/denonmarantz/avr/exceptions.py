"""Exception classes for the Denon/Marantz protocol."""


class DenonMarantzException(Exception):
    pass


class ConnectionFailed(DenonMarantzException):
    pass


class NotConnectedException(DenonMarantzException):
    pass


class UnsupportedZone(DenonMarantzException):
    pass


class UnknownCommand(DenonMarantzException):
    """Line or code does not match any registered command code."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"No command registered for {line!r}")


class DecodeSkip(DenonMarantzException):
    """Payload did not match any known shape and was dropped."""

    def __init__(self, code: str, payload: str):
        self.code = code
        self.payload = payload
        super().__init__(f"'code':{code}, 'payload':{payload!r}")

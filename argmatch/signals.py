# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by argmatch.

These signals interrupt matching when a help or version flag is seen. They are
not errors: `ArgumentParser.match()` catches them and turns them into the
`HelpRequested` / `VersionRequested` outcomes, and `parse_args()` re-raises them
after rendering when `exit_on_error` is disabled.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: A help flag was matched.
- VersionSignal: A version flag was matched.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in argmatch."""


class HelpSignal(FlowSignal):
    """Raised when a help flag short-circuits matching."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)


class VersionSignal(FlowSignal):
    """Raised when a version flag short-circuits matching."""

    def __init__(self, version: str, message: str = "Version signal received."):
        super().__init__(message)
        self.version = version

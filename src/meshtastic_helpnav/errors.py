"""Error types raised by the help navigator."""


class HelpNavError(Exception):
    """Base class for all help navigator errors."""

    pass


class CatalogFilterError(HelpNavError):
    """A command filter failed while the catalog was being built."""

    def __init__(self, command: str, cause: BaseException):
        super().__init__(f"Filter failed for command /{command}: {cause}")
        self.command = command


class EmptyCatalogError(HelpNavError):
    """There are no pages to show."""

    def __init__(self, message: str = "No help message found"):
        super().__init__(message)


class MalformedEventError(HelpNavError):
    """A component event could not be interpreted.

    The control layer and the pager disagree about the wire format,
    so this is an internal error rather than a user mistake.
    """

    def __init__(self, custom_id: str, reason: str):
        super().__init__(f"Internal error: {reason} ({custom_id!r})")
        self.custom_id = custom_id
        self.reason = reason


class NavigationRangeError(HelpNavError):
    """A navigation target lies outside the catalog."""

    def __init__(self, index: int, page_count: int):
        super().__init__(
            f"Internal error: page {index} out of range (0..{page_count - 1})"
        )
        self.index = index
        self.page_count = page_count


class RemoteOperationError(HelpNavError):
    """A send, edit, delete or acknowledge call failed."""

    def __init__(self, operation: str, detail: str = ""):
        message = f"Remote operation '{operation}' failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.operation = operation

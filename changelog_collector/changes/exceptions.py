"""Custom exceptions for the changes module."""


class UnknownChangeTypeError(Exception):
    """Raised when a change with an unnormalized type reaches the grouping stage."""

    def __init__(self, change_type: str, module: str) -> None:
        """Initializes the exception with the offending change type and module."""
        super().__init__(f'unknown change type "{change_type}" for module "{module}"')
        self.change_type = change_type
        self.module = module

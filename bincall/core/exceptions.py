"""bincall custom exceptions."""


class BincallError(Exception):
    """Base exception for bincall errors."""


class ContractError(BincallError):
    """An API contract was violated by the caller."""


class EntryPointUnsetError(ContractError):
    """Entry point was read before it was recorded."""


class DuplicateEntryPointError(ContractError):
    """Entry point was recorded more than once."""


class BuildOrderError(ContractError):
    """Instructions were loaded before the symbol table was complete."""


class ToolError(BincallError):
    """An external tool could not be run or exited with an error."""

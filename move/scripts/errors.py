from typing import List, Optional


class ScriptError(Exception):
    """
    Base class for failures reported to the operator. Every script turns these into an
    "Error: ..." line and exit status 1.
    """

    def __init__(self, message: str, hints: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.hints = list(hints or [])


class ConfigurationError(ScriptError):
    pass


class BuildError(ScriptError):
    pass


class SuiCommandError(ScriptError):
    pass


class TransactionFailedError(ScriptError):
    pass


class LedgerError(ScriptError):
    pass


class DeploymentNotFoundError(LedgerError):
    pass


class TokenNotWhitelistedError(LedgerError):
    pass

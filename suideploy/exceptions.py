"""
suideploy Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI
and the RPC test client.
"""

from typing import Optional


class SuiDeployError(Exception):
    """Base exception for all suideploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(SuiDeployError):
    """Raised when configuration or key material is invalid or missing."""

    pass


class PreconditionError(SuiDeployError):
    """Raised when a required artifact (manifest, build output, persisted id) is missing."""

    pass


class SuiCommandError(SuiDeployError):
    """Raised when a sui CLI invocation exits non-zero or cannot be started."""

    pass


class TransactionError(SuiDeployError):
    """Raised when a transaction response reports a status other than success."""

    def __init__(self, message: str, error: Optional[str] = None):
        self.error = error
        super().__init__(message, context=f"Error: {error}" if error else None)


class SuiRpcError(SuiDeployError):
    """Raised when the fullnode JSON-RPC rejects a request or is unreachable."""

    def __init__(self, method: str, message: str, code: Optional[int] = None):
        self.method = method
        self.code = code
        context = f"Method: {method}"
        if code is not None:
            context += f", Code: {code}"
        super().__init__(message, context=context)


class MissingDeploymentError(PreconditionError):
    """Raised when an upgrade needs identifiers that were never persisted."""

    def __init__(self, missing_keys: list[str], env_path: str):
        self.missing_keys = missing_keys
        message = f"Missing {', '.join(missing_keys)} in {env_path}"
        context = "Run: suideploy deploy <network> to publish the package first"
        super().__init__(message, context)

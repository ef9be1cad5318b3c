"""Centralized exit codes for the ctxfix CLI."""


class ExitCodes:
    """Standard exit codes for ctxfix CLI commands."""

    SUCCESS = 0

    FATAL = 1

    PENDING_REWRITES = 3

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success - nothing left to migrate",
            cls.FATAL: "Fatal parse, print or write error",
            cls.PENDING_REWRITES: "Files still import golang.org/x/net/context",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")

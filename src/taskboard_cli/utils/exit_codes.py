"""
Exit codes for Taskboard CLI.

Scripts can tell a rejected login apart from an unreachable store or a
mistyped ID without parsing output.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Authentication failure (not logged in, rejected credentials)
ERROR_AUTH_FAILURE = 3

# The store rejected or did not answer a read or write
ERROR_NETWORK = 4

# ID or suffix did not match anything on the board
ERROR_NOT_FOUND = 5

_DESCRIPTIONS = {
    SUCCESS: "Command executed successfully",
    ERROR_GENERAL: "A general error occurred",
    ERROR_INVALID_ARGS: "Invalid arguments or validation error",
    ERROR_AUTH_FAILURE: "Authentication failure - run 'taskboard auth login'",
    ERROR_NETWORK: "The remote store rejected the request or could not be reached",
    ERROR_NOT_FOUND: "Nothing on the board matches that ID",
}


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    return _DESCRIPTIONS.get(code, "Unknown error")

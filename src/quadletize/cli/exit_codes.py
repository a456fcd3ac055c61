# topmark:header:start
#
#   project      : Quadletize
#   file         : exit_codes.py
#   file_relpath : src/quadletize/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Exit codes for the Quadletize CLI.

Values follow the BSD ``sysexits`` convention so scripts can tell a bad
invocation from bad input or a failed write.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes.

    Attributes:
        SUCCESS: The file was rendered (and written).
        FAILURE: Generic failure.
        USAGE_ERROR: Invalid flags or arguments. Mirrors ``EX_USAGE (64)``.
        DATA_ERROR: Input could not be parsed or rendered. Mirrors
            ``EX_DATAERR (65)``.
        CANT_CREATE: The output file exists and ``--overwrite`` was not
            given. Mirrors ``EX_CANTCREAT (73)``.
        IO_ERROR: Writing the output failed. Mirrors ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid configuration file. Mirrors ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Last-resort bucket for unknown errors.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    CANT_CREATE = 73  # EX_CANTCREAT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255

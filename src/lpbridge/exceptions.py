from __future__ import annotations


class LpBridgeError(Exception):
    """Base class of every error raised by lpbridge."""


class SolverError(LpBridgeError):
    """A solver backend could not produce a solution."""


class SolverNotFoundError(SolverError):
    """The external solver command could not be launched."""


class SolverProcessError(SolverError):
    """The external solver ran but exited with a failure status.

    The captured outputs are kept on the exception, they are also written next
    to the model file as ``<unique_name>.stdout`` and ``<unique_name>.stderr``.
    """

    def __init__(self, msg: str, *, returncode: int, stdout: str = "", stderr: str = "") -> None:
        super().__init__(msg)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class SolutionFormatError(LpBridgeError, ValueError):
    """A solution file does not follow the ``<name> <value>`` line format."""

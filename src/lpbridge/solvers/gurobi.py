from __future__ import annotations

from typing import TYPE_CHECKING, Self

from lpbridge._dependencies import is_command_available
from lpbridge.config import get_settings
from lpbridge.solvers.base import CommandLineSolver
from lpbridge.solvers.status import GUROBI_PATTERNS, StatusPatterns

if TYPE_CHECKING:
    from pathlib import Path


class GurobiSolver(CommandLineSolver):
    """Backend running the Gurobi command line tool (``gurobi_cl``).

    The solver is called as ``gurobi_cl ResultFile=<id>.sol <id>.lp``.

    Examples
    --------
    >>> x = ContinuousVar("x", lower_bound=2)
    >>> problem = Problem("p").minimize(x)
    >>> solver = GurobiSolver()
    >>> solution = solver.run(problem)
    >>> solution.status
    <Status.OPTIMAL: 'Optimal'>
    >>> solution.get_variable_value("x")
    2.0

    """

    name = "Gurobi"

    def __init__(
        self,
        command_name: str | None = None,
        *,
        work_dir: str | Path | None = None,
        status_patterns: StatusPatterns = GUROBI_PATTERNS,
    ) -> None:
        """Initialize the Gurobi backend.

        Parameters
        ----------
        command_name : str | None, default None
            The Gurobi executable, the ``gurobi_command`` setting when None.
        work_dir : str | Path | None, default None
            Directory receiving the exchanged files, the ``work_dir`` setting when None.
        status_patterns : StatusPatterns, default GUROBI_PATTERNS
            Phrases used to infer the status from the Gurobi log.

        """
        settings = get_settings()
        super().__init__(
            settings.gurobi_command if command_name is None else command_name,
            work_dir=settings.work_dir if work_dir is None else work_dir,
            status_patterns=status_patterns,
        )

    def with_command_name(self, command_name: str) -> Self:
        """Return a copy of the backend running another executable."""
        return self.__class__(
            command_name, work_dir=self.work_dir, status_patterns=self.status_patterns
        )

    def is_available(self) -> bool:
        """Check if the Gurobi executable can be found."""
        return is_command_available(self.command_name)

    def build_command(self, model_file: Path, result_file: Path) -> list[str]:
        return [self.command_name, f"ResultFile={result_file}", str(model_file)]

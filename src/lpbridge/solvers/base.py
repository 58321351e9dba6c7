from __future__ import annotations

import contextlib
import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from lpbridge.exceptions import SolverNotFoundError, SolverProcessError
from lpbridge.lp_format import write_lp
from lpbridge.solvers.parsing import read_solution_file

if TYPE_CHECKING:
    from typing import TextIO

    from lpbridge.problem import Problem
    from lpbridge.solvers.solution import Solution
    from lpbridge.solvers.status import StatusPatterns

logger = logging.getLogger(__name__)


class Solver(ABC):
    """Abstract base class for all solver backends."""

    name: str

    @abstractmethod
    def run(self, problem: Problem) -> Solution:
        """Solve `problem`.

        Returns
        -------
        Solution
            The status and the variable values reported by the solver.

        Raises
        ------
        SolverError
            If the solver could not be launched or failed.

        """


class SolverWithSolutionParsing:
    """Mixin for backends whose solver writes a ``<name> <value>`` solution file."""

    def read_specific_solution(self, f: TextIO, problem: Problem | None = None) -> Solution:
        """Read an open solution file.

        Backends override this method when their solver writes a variant of
        the format.
        """
        return read_solution_file(f, problem)

    def read_solution(self, path: str | Path, problem: Problem | None = None) -> Solution:
        """Open the solution file at `path` and read it."""
        with Path(path).open(encoding="utf-8") as f:
            return self.read_specific_solution(f, problem)


def _describe_returncode(returncode: int) -> str:
    if returncode < 0:
        return f"terminated by signal {-returncode}"
    return f"exit status: {returncode}"


def _remove_quietly(path: Path) -> None:
    with contextlib.suppress(OSError):
        path.unlink()


class CommandLineSolver(SolverWithSolutionParsing, Solver):
    """Base class of backends driving a solver executable.

    `run` writes the problem to ``<work_dir>/<unique_name>.lp``, runs the
    command returned by `build_command`, reads ``<work_dir>/<unique_name>.sol``
    and refines the status with `status_patterns` applied to the standard
    output. Both files are derived from the problem, so one instance can run
    several problems.

    On a non-zero exit, the standard output and error of the solver are
    written to ``<unique_name>.stdout`` and ``<unique_name>.stderr`` in
    `work_dir` and a `SolverProcessError` is raised.

    Attributes
    ----------
    command_name : str
        The solver executable, looked up on the PATH when not a path.
    work_dir : Path
        Directory receiving the exchanged files.
    status_patterns : StatusPatterns
        Phrases used to infer the status from the solver output.

    """

    def __init__(
        self,
        command_name: str,
        *,
        work_dir: str | Path,
        status_patterns: StatusPatterns,
    ) -> None:
        self.command_name = command_name
        self.work_dir = Path(work_dir)
        self.status_patterns = status_patterns

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(command_name={self.command_name!r})"

    @abstractmethod
    def build_command(self, model_file: Path, result_file: Path) -> list[str]:
        """Return the command line solving `model_file` into `result_file`."""

    def run(self, problem: Problem) -> Solution:
        model_file = self.work_dir / f"{problem.unique_name}.lp"
        result_file = self.work_dir / f"{problem.unique_name}.sol"

        try:
            write_lp(problem, model_file)
            completed = self._execute(self.build_command(model_file, result_file))
            return self._process_output(problem, completed, result_file)
        finally:
            _remove_quietly(model_file)
            _remove_quietly(result_file)

    def _execute(self, command: list[str]) -> subprocess.CompletedProcess[str]:
        logger.debug("Running the %s solver: %s", self.name, " ".join(command))
        try:
            return subprocess.run(
                command,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            msg = f"Error running the {self.name} solver ({self.command_name!r}): {e}"
            raise SolverNotFoundError(msg) from e

    def _process_output(
        self, problem: Problem, completed: subprocess.CompletedProcess[str], result_file: Path
    ) -> Solution:
        if completed.returncode != 0:
            self.work_dir.joinpath(f"{problem.unique_name}.stderr").write_text(
                completed.stderr, encoding="utf-8"
            )
            self.work_dir.joinpath(f"{problem.unique_name}.stdout").write_text(
                completed.stdout, encoding="utf-8"
            )
            description = _describe_returncode(completed.returncode)
            logger.warning(
                "The %s solver failed on %r (%s), outputs saved in %s",
                self.name,
                problem.name,
                description,
                self.work_dir,
            )
            msg = f"The {self.name} solver failed ({description})"
            raise SolverProcessError(
                msg,
                returncode=completed.returncode,
                stdout=completed.stdout,
                stderr=completed.stderr,
            )

        solution = self.read_solution(result_file, problem)
        status = self.status_patterns.infer(completed.stdout, solution.status)
        logger.info("The %s solver solved %r: %s", self.name, problem.name, status.value)
        return solution.with_status(status)

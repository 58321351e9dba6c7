from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lpbridge.exceptions import SolutionFormatError
from lpbridge.solvers.solution import Solution, Status

if TYPE_CHECKING:
    from typing import TextIO

    from lpbridge.problem import Problem

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"


def read_solution_file(f: TextIO, problem: Problem | None = None) -> Solution:
    """Read a solution file into a `Solution`.

    The expected format is one header line, ignored, followed by one
    ``<name> <value>`` line per variable. Lines starting with ``#`` are skipped
    (recent solvers write banner comments after the header). When a name
    appears twice, the last value wins.

    The file carries no status, the returned solution is `Status.OPTIMAL`;
    backends refine it from the solver output.

    Parameters
    ----------
    f : TextIO
        An open text file.
    problem : Problem | None, default None
        The problem the solution is bound to.

    Raises
    ------
    SolutionFormatError
        If the header is missing, a line does not hold exactly two tokens, or a
        value is not a number. Parsing stops at the first error.

    """
    if not f.readline():
        msg = "Incorrect solution format: the file is empty"
        raise SolutionFormatError(msg)

    results: dict[str, float] = {}
    for lineno, line in enumerate(f, start=2):
        if line.startswith(COMMENT_MARKER):
            continue
        tokens = line.split()
        if len(tokens) != 2:
            msg = f"Incorrect solution format at line {lineno}: {line.rstrip()!r}"
            raise SolutionFormatError(msg)
        name, value = tokens
        try:
            results[name] = float(value)
        except ValueError as e:
            msg = f"Invalid value {value!r} for variable {name!r} at line {lineno}"
            raise SolutionFormatError(msg) from e

    logger.debug("Read %d variable values", len(results))
    return Solution.from_results(Status.OPTIMAL, results, problem)

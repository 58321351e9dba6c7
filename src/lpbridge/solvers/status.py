from __future__ import annotations

from dataclasses import dataclass

from lpbridge.solvers.solution import Status


@dataclass(frozen=True)
class StatusPatterns:
    """Phrases announcing the solve status in the console output of a solver.

    Each solver (and sometimes each solver version) words its log differently,
    backends hold one instance and new wordings only require a new instance.

    Attributes
    ----------
    optimal : tuple[str, ...]
        Any of these substrings means the solution is optimal.
    infeasible : tuple[str, ...]
        Any of these substrings means the problem is infeasible.

    """

    optimal: tuple[str, ...] = ()
    infeasible: tuple[str, ...] = ()

    def infer(self, output: str, default: Status) -> Status:
        """Return the status announced in `output`, or `default` when none is found.

        Optimal phrases are checked first.
        """
        if any(pattern in output for pattern in self.optimal):
            return Status.OPTIMAL
        if any(pattern in output for pattern in self.infeasible):
            return Status.INFEASIBLE
        return default


# "infesible" is the wording matched by existing integrations, kept until it
# is checked against the logs of current gurobi_cl releases.
GUROBI_PATTERNS = StatusPatterns(optimal=("Optimal objective",), infeasible=("infesible",))

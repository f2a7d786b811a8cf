"""Top-level CSP solve interface.

Expose `solve_problem(problem)` that accepts either a pre-built CSP object or a raw
problem dictionary compatible with `src.csp.parser.parse_problem`.
"""

from typing import Any, Dict, Optional

from src.csp import solver_core
from src.csp.model import CSP, SolverOptions
from src.csp.parser import parse_assignment, parse_problem
from src.utils.trace import Tracer


def solve_problem(
    problem: Any,
    assignment: Optional[Dict[str, Any]] = None,
    options: Optional[SolverOptions] = None,
    tracer: Optional[Tracer] = None,
) -> Optional[Dict[str, Any]]:
    """
    Solve a problem and return a mapping from variable name to assigned value,
    or None when no consistent assignment exists.
    Accepts:
      - CSP instances (used directly)
      - Raw problem dictionaries (parsed via `parse_problem`); their
        "assignment" entry seeds the search unless `assignment` is given
    """
    if isinstance(problem, CSP):
        csp = problem
    elif isinstance(problem, dict):
        csp = parse_problem(problem)
        if assignment is None:
            assignment = parse_assignment(problem)
    else:
        raise TypeError("solve_problem expects a CSP instance or problem dictionary")

    return solver_core.solve(csp, assignment, options, tracer)


__all__ = ["solve_problem"]

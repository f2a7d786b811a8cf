"""Backtracking CSP solver with optional forward checking and AC-3 arc consistency."""

import sys
from typing import Any, Dict, Optional

from .model import CSP, Assignment, SolverOptions
from .propagation import enforce_arc_consistency, forward_check
from .validator import satisfies
from src.utils.logging_utils import get_logger
from src.utils.trace import Tracer

logger = get_logger()

# Stack frames each search level may use (search call, forward-check cascade, deepcopy).
_FRAMES_PER_VARIABLE = 8
_RECURSION_HEADROOM = 200


def solve(
    csp: CSP,
    assignment: Optional[Dict[str, Any]] = None,
    options: Optional[SolverOptions] = None,
    tracer: Optional[Tracer] = None,
) -> Optional[Assignment]:
    """
    Find one complete assignment satisfying every constraint of `csp`.

    `assignment` seeds the search with already chosen values. Returns None
    when no consistent completion exists, including when the seed itself
    violates a constraint. Raises ValueError when the seed names a variable
    outside the CSP. Neither `csp` nor `assignment` is modified.
    """
    options = options or SolverOptions()
    tracer = tracer or Tracer(enabled=False)
    seed = dict(assignment or {})

    known = set(csp.variables)
    strangers = [var for var in seed if var not in known]
    if strangers:
        raise ValueError(f"Seed assignment names unknown variable(s): {', '.join(map(str, strangers))}")
    if not satisfies(seed, csp.constraints, tracer=tracer):
        logger.debug("Seed assignment is inconsistent")
        return None

    _ensure_recursion_headroom(len(csp.variables))

    result = _backtrack(csp, seed, options, tracer)
    if result is not None:
        tracer.log_solution_found(assignment_size=len(result))
    return result


def _backtrack(
    csp: CSP, assignment: Assignment, options: SolverOptions, tracer: Tracer
) -> Optional[Assignment]:
    if csp.is_complete(assignment):
        return assignment

    if options.arc_consistency:
        csp = csp.copy()
        if enforce_arc_consistency(csp, tracer):
            logger.debug("AC-3 failed with %d of %d variables assigned", len(assignment), len(csp.variables))
            return None

    variable = _select_unassigned_variable(csp, assignment)

    for value in list(csp.domains[variable]):
        local_assignment = dict(assignment)
        local_assignment[variable] = value

        if not satisfies(local_assignment, csp.constraints, tracer=tracer, variable=variable):
            continue

        tracer.log_assign(
            variable=variable,
            value=value,
            domain_size=len(csp.domains[variable]),
            assignment_size=len(local_assignment),
        )

        local_csp = csp.copy()
        if options.forward_checking and forward_check(local_csp, variable, value, tracer):
            logger.debug("Forward checking rejected %s=%r", variable, value)
            continue

        result = _backtrack(local_csp, local_assignment, options, tracer)
        if result is not None:
            return result

    tracer.log_backtrack(variable)
    logger.debug("Backtracking from %s", variable)
    return None


def _select_unassigned_variable(csp: CSP, assignment: Assignment) -> str:
    # Static order: the first variable in problem order without a value.
    return next(variable for variable in csp.variables if variable not in assignment)


def _ensure_recursion_headroom(num_variables: int) -> None:
    needed = num_variables * _FRAMES_PER_VARIABLE + _RECURSION_HEADROOM
    if sys.getrecursionlimit() < needed:
        logger.debug("Raising recursion limit to %d", needed)
        sys.setrecursionlimit(needed)

"""CSP model, validation, propagation, and backtracking search."""

from .model import CSP, Distinct, MissingArcsError, MustSatisfy, SolverOptions, symmetric_arcs
from .validator import satisfies
from .propagation import enforce_arc_consistency, forward_check
from .solver_core import solve
from .parser import parse_problem

__all__ = [
    "CSP",
    "Distinct",
    "MustSatisfy",
    "MissingArcsError",
    "SolverOptions",
    "symmetric_arcs",
    "satisfies",
    "enforce_arc_consistency",
    "forward_check",
    "solve",
    "parse_problem",
]

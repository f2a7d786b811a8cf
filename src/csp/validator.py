"""Constraint validation for partial and complete assignments."""

from typing import Any, Iterable, Mapping, Optional, Tuple

from .model import Constraint, Distinct, MustSatisfy, same_value
from src.utils.trace import Tracer


def check(assignment: Mapping[str, Any], constraints: Iterable[Constraint]) -> Tuple[bool, bool]:
    """
    Evaluate `assignment` against `constraints`.

    Returns `(consistent, evaluated)`: whether no constraint is violated, and
    whether at least one constraint had enough assigned variables to be
    evaluated at all. Evaluation stops at the first violation.
    """
    evaluated = False

    for constraint in constraints:
        if isinstance(constraint, Distinct):
            variables = constraint.variables
            for i in range(len(variables) - 1):
                a = variables[i]
                if a not in assignment:
                    continue
                for b in variables[i + 1:]:
                    if b not in assignment:
                        continue
                    evaluated = True
                    if same_value(assignment[a], assignment[b]):
                        return False, evaluated

        elif isinstance(constraint, MustSatisfy):
            target = constraint.assignment
            if any(var not in assignment for var in target):
                continue
            evaluated = True

            # All-or-nothing: a mix of matches and mismatches is a violation.
            some_match = False
            some_mismatch = False
            for var, required in target.items():
                if same_value(assignment[var], required):
                    some_match = True
                else:
                    some_mismatch = True
            if some_match and some_mismatch:
                return False, evaluated

        else:
            raise TypeError(f"Unsupported constraint: {constraint!r}")

    return True, evaluated


def satisfies(
    assignment: Mapping[str, Any],
    constraints: Iterable[Constraint],
    strict: bool = False,
    tracer: Optional[Tracer] = None,
    variable: Optional[str] = None,
) -> bool:
    """
    Check whether `assignment` violates none of `constraints`.

    With `strict`, an assignment that no constraint could evaluate also
    fails; AC-3 relies on this to decide whether a pair of values supports
    each other.
    """
    consistent, evaluated = check(assignment, constraints)
    result = consistent and (evaluated or not strict)
    if tracer is not None:
        tracer.log_constraint_check(is_valid=result, strict=strict, variable=variable)
    return result

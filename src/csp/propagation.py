"""Domain propagation: AC-3 arc consistency and forward checking."""

from collections import deque
from typing import Any, Deque, List, Optional, Tuple

from .model import CSP, Arc, Distinct, MissingArcsError, MustSatisfy, same_value
from .validator import satisfies
from src.utils.logging_utils import get_logger
from src.utils.trace import Tracer

logger = get_logger()


def enforce_arc_consistency(csp: CSP, tracer: Optional[Tracer] = None) -> bool:
    """
    Run AC-3 over `csp.arcs`, pruning `csp.domains` in place.

    Returns True on a domain wipeout, False once every arc is consistent.
    Raises MissingArcsError when the CSP carries no arc list.
    """
    if csp.arcs is None or csp.neighbours is None:
        raise MissingArcsError("Must provide arcs for AC-3")

    queue: Deque[Arc] = deque(csp.arcs)

    arcs_processed = 0
    variables_affected = 0
    while queue:
        x, y = queue.popleft()
        arcs_processed += 1
        if revise(csp, x, y):
            variables_affected += 1
            if not csp.domains[x]:
                if tracer is not None:
                    tracer.log_wipeout(x, reason=f"AC-3 revising ({x}, {y})")
                    tracer.log_ac3_run(variables_affected, arcs_processed)
                return True
            # x shrank, so every arc pointing into x needs another look.
            queue.extend((b, x) for b in csp.neighbours[x])

    if tracer is not None:
        tracer.log_ac3_run(variables_affected, arcs_processed)
    return False


def revise(csp: CSP, x: str, y: str) -> bool:
    """Remove values of `x` that no value of `y` supports. Returns True if any were removed."""
    kept: List[Any] = []
    for value_x in csp.domains[x]:
        if any(
            satisfies({x: value_x, y: value_y}, csp.constraints, strict=True)
            for value_y in csp.domains[y]
        ):
            kept.append(value_x)

    if len(kept) == len(csp.domains[x]):
        return False
    csp.domains[x] = kept
    return True


def forward_check(csp: CSP, variable: str, value: Any, tracer: Optional[Tracer] = None) -> bool:
    """
    Propagate `variable = value` through the Distinct constraints, pruning in place.

    Returns True on a domain wipeout. The CSP is left partially pruned in
    that case, so callers should only pass a disposable copy.
    """
    to_propagate: List[Tuple[str, Any]] = []

    csp.domains[variable] = [value]

    pruned = 0
    for constraint in csp.constraints:
        if isinstance(constraint, Distinct):
            if variable not in constraint.variables:
                continue
            for other in constraint.variables:
                if other == variable:
                    continue
                domain = csp.domains[other]
                if not any(same_value(v, value) for v in domain):
                    continue
                if len(domain) == 1:
                    logger.debug("Forward checking %s=%r wipes out %s", variable, value, other)
                    if tracer is not None:
                        tracer.log_wipeout(other, reason=f"Forward checking {variable}={value}")
                    return True

                csp.domains[other] = [v for v in domain if not same_value(v, value)]
                pruned += 1
                if tracer is not None:
                    tracer.log_domain_reduction(
                        other, len(csp.domains[other]), reason=f"Forward checking {variable}={value}"
                    )
                if len(csp.domains[other]) == 1:
                    to_propagate.append((other, csp.domains[other][0]))

        elif isinstance(constraint, MustSatisfy):
            # Not enough structure to prune from a partial target; the
            # validator still checks these during search.
            continue

        else:
            raise TypeError(f"Unsupported constraint: {constraint!r}")

    if tracer is not None and pruned:
        tracer.log_forward_check(variable, domains_pruned=pruned)

    for forced_variable, forced_value in to_propagate:
        if forward_check(csp.copy(), forced_variable, forced_value, tracer):
            return True

    return False

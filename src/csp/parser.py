"""Problem parser: convert structural problem dictionaries into CSP instances.

Expected shape (JSON friendly):

    {
      "id": "australia",
      "variables": ["WA", "NT", ...],
      "domains": {"WA": ["red", "green", "blue"], ...},
      "constraints": [
        {"type": "distinct", "variables": ["WA", "NT"]},
        {"type": "satisfy", "assignment": {"lion": true, "today": "Thursday"}}
      ],
      "arcs": [["WA", "NT"], ...],
      "symmetric_arcs": true,
      "assignment": {"WA": "red"}
    }

`variables` defaults to the domain keys in order; `arcs`, `symmetric_arcs`
and `assignment` are optional.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .model import CSP, Arc, Constraint, Distinct, MustSatisfy, symmetric_arcs

_DISTINCT_TYPES = {"distinct", "must_be_distinct", "alldiff", "all_diff"}
_SATISFY_TYPES = {"satisfy", "must_satisfy"}


def parse_problem(problem: Dict[str, Any]) -> CSP:
    """Build a CSP from a problem dictionary. Raises ValueError on malformed input."""
    if not isinstance(problem, dict):
        raise ValueError("Problem definition must be a mapping")

    domains = problem.get("domains")
    if not isinstance(domains, dict) or not domains:
        raise ValueError("Problem definition needs a non-empty 'domains' mapping")
    for var, values in domains.items():
        if not isinstance(values, (list, tuple)):
            raise ValueError(f"Domain of {var} must be a list of values")

    variables = problem.get("variables")
    if variables is None:
        variables = list(domains.keys())
    elif not isinstance(variables, (list, tuple)):
        raise ValueError("'variables' must be a list")

    constraints = [_parse_constraint(raw) for raw in problem.get("constraints") or []]
    arcs = _parse_arcs(problem.get("arcs"), bool(problem.get("symmetric_arcs", False)))

    return CSP(
        variables=list(variables),
        domains={var: list(values) for var, values in domains.items()},
        constraints=constraints,
        arcs=arcs,
    )


def parse_assignment(problem: Dict[str, Any]) -> Dict[str, Any]:
    """Return the seed assignment stored in a problem dictionary, if any."""
    raw = problem.get("assignment") or {}
    if not isinstance(raw, dict):
        raise ValueError("'assignment' must be a mapping")
    return dict(raw)


def _parse_constraint(raw: Any) -> Constraint:
    if not isinstance(raw, dict):
        raise ValueError(f"Constraint must be a mapping, got {raw!r}")

    kind = str(raw.get("type", "")).strip().lower()
    if kind in _DISTINCT_TYPES:
        variables = raw.get("variables")
        if not isinstance(variables, (list, tuple)):
            raise ValueError(f"Distinct constraint needs a 'variables' list: {raw!r}")
        return Distinct(variables)
    if kind in _SATISFY_TYPES:
        target = raw.get("assignment")
        if not isinstance(target, dict):
            raise ValueError(f"Satisfy constraint needs an 'assignment' mapping: {raw!r}")
        return MustSatisfy(target)
    raise ValueError(f"Unknown constraint type: {raw.get('type')!r}")


def _parse_arcs(raw: Any, symmetric: bool) -> Optional[List[Arc]]:
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)):
        raise ValueError("'arcs' must be a list of pairs")

    pairs: List[Arc] = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"Arc must be a pair of variables, got {item!r}")
        pairs.append((item[0], item[1]))
    return symmetric_arcs(pairs) if symmetric else pairs

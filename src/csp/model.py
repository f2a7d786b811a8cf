"""CSP core data structures: constraint variants, the problem instance, and solver options."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

Assignment = Dict[str, Any]
Domains = Dict[str, List[Any]]
Arc = Tuple[str, str]


def same_value(a: Any, b: Any) -> bool:
    """Value equality that keeps booleans apart from the integers 0 and 1."""
    return isinstance(a, bool) == isinstance(b, bool) and a == b


class MissingArcsError(ValueError):
    """Raised when arc consistency is requested on a CSP without an arc list."""


@dataclass(frozen=True)
class Distinct:
    """Every pair of assigned variables in `variables` must hold different values."""

    variables: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", tuple(self.variables))
        if len(self.variables) < 2:
            raise ValueError("Distinct constraints need at least two variables")
        if len(set(self.variables)) != len(self.variables):
            raise ValueError("Distinct constraints must not repeat a variable")

    @property
    def scope(self) -> Tuple[str, ...]:
        return self.variables

    def __str__(self) -> str:
        return f"Distinct: {', '.join(self.variables)}"


@dataclass(frozen=True)
class MustSatisfy:
    """
    A partial target assignment with all-or-nothing semantics.

    Once every target variable is assigned, either all of them hold their
    target value or none of them do. A mixed match is a violation.
    """

    assignment: Mapping[str, Any]

    def __post_init__(self) -> None:
        if not self.assignment:
            raise ValueError("MustSatisfy constraints need a non-empty target assignment")
        object.__setattr__(self, "assignment", dict(self.assignment))

    @property
    def scope(self) -> Tuple[str, ...]:
        return tuple(self.assignment)

    def __hash__(self) -> int:
        return hash(tuple(self.assignment.items()))

    def __str__(self) -> str:
        pairs = ", ".join(f"{var}={value}" for var, value in self.assignment.items())
        return f"MustSatisfy: {pairs}"


Constraint = Union[Distinct, MustSatisfy]


def symmetric_arcs(pairs: Iterable[Tuple[str, str]]) -> List[Arc]:
    """Return the given pairs followed by each pair reversed."""
    forward = [(a, b) for a, b in pairs]
    return forward + [(b, a) for a, b in forward]


@dataclass
class SolverOptions:
    forward_checking: bool = False
    arc_consistency: bool = False


@dataclass
class CSP:
    variables: List[str]
    domains: Domains
    constraints: List[Constraint] = field(default_factory=list)
    arcs: Optional[List[Arc]] = None

    def __post_init__(self) -> None:
        self.variables = list(self.variables)
        if len(set(self.variables)) != len(self.variables):
            raise ValueError("Variable names must be unique")

        known = set(self.variables)
        missing = [v for v in self.variables if v not in self.domains]
        if missing:
            raise ValueError(f"No domain given for: {', '.join(map(str, missing))}")
        unknown = [v for v in self.domains if v not in known]
        if unknown:
            raise ValueError(f"Domain given for unknown variable(s): {', '.join(map(str, unknown))}")

        # Domains are pruned during search; never alias the caller's lists.
        self.domains = {var: list(self.domains[var]) for var in self.variables}

        self.constraints = list(self.constraints)
        for constraint in self.constraints:
            if not isinstance(constraint, (Distinct, MustSatisfy)):
                raise TypeError(f"Unsupported constraint: {constraint!r}")
            strangers = [v for v in constraint.scope if v not in known]
            if strangers:
                raise ValueError(f"{constraint} mentions unknown variable(s): {', '.join(strangers)}")

        self.neighbours: Optional[Dict[str, List[str]]] = None
        if self.arcs is not None:
            self.arcs = [(a, b) for a, b in self.arcs]
            for a, b in self.arcs:
                if a not in known or b not in known:
                    raise ValueError(f"Arc ({a}, {b}) mentions an unknown variable")
            self.neighbours = {var: [] for var in self.variables}
            for a, b in self.arcs:
                self.neighbours[a].append(b)

    def copy(self) -> "CSP":
        """Deep copy used to isolate one search branch's domain pruning."""
        return copy.deepcopy(self)

    def is_complete(self, assignment: Assignment) -> bool:
        return all(var in assignment for var in self.variables)

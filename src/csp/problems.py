"""Sample problem definitions: Australia map colouring and the Lion/Unicorn riddle."""

from typing import Callable, Dict, Tuple

from .model import CSP, Assignment, Distinct, MustSatisfy, symmetric_arcs
from .propagation import forward_check

AUSTRALIA_VARIABLES = ["WA", "NT", "Q", "NSW", "V", "SA", "T"]
AUSTRALIA_COLOURS = ["red", "green", "blue"]
AUSTRALIA_BORDERS = [
    ("SA", "WA"),
    ("SA", "NT"),
    ("SA", "Q"),
    ("SA", "NSW"),
    ("SA", "V"),
    ("WA", "NT"),
    ("NT", "Q"),
    ("Q", "NSW"),
    ("NSW", "V"),
]

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def australia() -> CSP:
    """Colour the Australian states so that no two bordering states share a colour."""
    return CSP(
        variables=AUSTRALIA_VARIABLES,
        domains={region: list(AUSTRALIA_COLOURS) for region in AUSTRALIA_VARIABLES},
        constraints=[Distinct(pair) for pair in AUSTRALIA_BORDERS],
        arcs=symmetric_arcs(AUSTRALIA_BORDERS),
    )


def australia_failure_case() -> Tuple[CSP, Assignment]:
    """
    Australia pre-pruned by forward checking WA=red and then Q=green.

    Returns the pruned CSP together with the matching seed assignment; the
    pair has no consistent completion.
    """
    csp = australia()
    # Wipeouts inside the cascades are expected here; only the pruning matters.
    forward_check(csp, "WA", "red")
    forward_check(csp, "Q", "green")
    return csp, {"WA": "red", "Q": "green"}


def lion_unicorn() -> CSP:
    """The Lion and Unicorn riddle: `lion`/`unicorn` say whether each one's claim holds `today`."""
    return CSP(
        variables=["today", "lion", "unicorn"],
        domains={
            "today": list(WEEKDAYS),
            "lion": [True, False],
            "unicorn": [True, False],
        },
        constraints=[
            MustSatisfy({"lion": True, "today": "Thursday"}),
            MustSatisfy({"lion": False, "today": "Monday"}),
            MustSatisfy({"unicorn": True, "today": "Sunday"}),
            MustSatisfy({"unicorn": False, "today": "Thursday"}),
        ],
        arcs=symmetric_arcs([("lion", "today"), ("unicorn", "today")]),
    )


SAMPLE_PROBLEMS: Dict[str, Callable[[], Tuple[CSP, Assignment]]] = {
    "australia": lambda: (australia(), {}),
    "australia-failure": australia_failure_case,
    "lion-unicorn": lambda: (lion_unicorn(), {}),
}

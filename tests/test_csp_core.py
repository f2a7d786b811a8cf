"""Unit tests for AC-3 and forward checking."""

import pytest

from src.csp.model import CSP, Distinct, MissingArcsError, symmetric_arcs
from src.csp.problems import australia, australia_failure_case, lion_unicorn
from src.csp.propagation import enforce_arc_consistency, forward_check, revise
from src.utils.trace import Tracer


def _make_distinct_csp(a_domain, b_domain):
    return CSP(
        variables=["A", "B"],
        domains={"A": a_domain, "B": b_domain},
        constraints=[Distinct(["A", "B"])],
        arcs=symmetric_arcs([("A", "B")]),
    )


def _make_triangle_csp(c_domain):
    return CSP(
        variables=["A", "B", "C"],
        domains={"A": [1, 2], "B": [1, 2], "C": c_domain},
        constraints=[Distinct(["A", "B"]), Distinct(["B", "C"]), Distinct(["A", "C"])],
    )


def test_revise_removes_unsupported_values():
    csp = _make_distinct_csp([1, 2], [1])
    assert revise(csp, "A", "B")
    assert csp.domains["A"] == [2]
    assert not revise(csp, "B", "A")


def test_ac3_removes_unsupported_values():
    csp = _make_distinct_csp([1, 2], [1])
    wipeout = enforce_arc_consistency(csp)
    assert not wipeout
    assert csp.domains["A"] == [2]
    assert csp.domains["B"] == [1]


def test_ac3_detects_wipeout():
    csp = _make_distinct_csp([1], [1])
    assert enforce_arc_consistency(csp)


def test_ac3_requires_arcs():
    csp = CSP(variables=["A", "B"], domains={"A": [1], "B": [2]}, constraints=[Distinct(["A", "B"])])
    with pytest.raises(MissingArcsError):
        enforce_arc_consistency(csp)


def test_ac3_arc_without_constraint_has_no_support():
    csp = CSP(variables=["A", "B"], domains={"A": [1], "B": [2]}, arcs=[("A", "B")])
    assert enforce_arc_consistency(csp)


def test_ac3_solves_lion_unicorn_domains():
    csp = lion_unicorn()
    assert not enforce_arc_consistency(csp)
    assert csp.domains == {"today": ["Thursday"], "lion": [True], "unicorn": [False]}


def test_ac3_is_idempotent():
    pruned = australia()
    forward_check(pruned, "SA", "blue")
    for csp in (lion_unicorn(), australia(), pruned):
        assert not enforce_arc_consistency(csp)
        before = {var: list(values) for var, values in csp.domains.items()}
        enforce_arc_consistency(csp)
        assert csp.domains == before


def test_ac3_wipes_out_failure_case():
    csp, _ = australia_failure_case()
    assert enforce_arc_consistency(csp)


def test_ac3_logs_run():
    tracer = Tracer()
    enforce_arc_consistency(lion_unicorn(), tracer)
    assert tracer.summary()["action_counts"]["ac3"] == 1


def test_forward_check_prunes_neighbour_values():
    csp = australia()
    wipeout = forward_check(csp, "WA", "red")
    assert not wipeout
    assert csp.domains["WA"] == ["red"]
    assert csp.domains["SA"] == ["green", "blue"]
    assert csp.domains["NT"] == ["green", "blue"]
    assert csp.domains["Q"] == ["red", "green", "blue"]
    assert csp.domains["T"] == ["red", "green", "blue"]


def test_forward_check_detects_wipeout():
    csp = _make_distinct_csp([1, 2], [1])
    assert forward_check(csp, "A", 1)


def test_forward_check_cascade_detects_wipeout():
    # A=1 forces B=2 and C=2, which then clash.
    csp = _make_triangle_csp([1, 2])
    assert forward_check(csp, "A", 1)


def test_forward_check_cascade_does_not_leak_pruning():
    csp = CSP(
        variables=["A", "B", "C"],
        domains={"A": [1, 2], "B": [1, 2], "C": [1, 2, 3]},
        constraints=[Distinct(["A", "B"]), Distinct(["B", "C"])],
    )
    assert not forward_check(csp, "A", 1)
    assert csp.domains["B"] == [2]
    assert csp.domains["C"] == [1, 2, 3]


def test_forward_check_skips_must_satisfy():
    csp = lion_unicorn()
    assert not forward_check(csp, "today", "Thursday")
    assert csp.domains["today"] == ["Thursday"]
    assert csp.domains["lion"] == [True, False]
    assert csp.domains["unicorn"] == [True, False]


def test_forward_check_is_monotonic():
    csp = australia()
    before = {var: set(values) for var, values in csp.domains.items()}
    for variable, value in [("SA", "blue"), ("WA", "red"), ("NT", "green")]:
        assert not forward_check(csp, variable, value)
        for var, values in csp.domains.items():
            assert set(values) <= before[var]
        before = {var: set(values) for var, values in csp.domains.items()}


def test_australia_failure_fixture_domains():
    csp, assignment = australia_failure_case()
    assert assignment == {"WA": "red", "Q": "green"}
    assert csp.domains["WA"] == ["red"]
    assert csp.domains["Q"] == ["green"]
    assert csp.domains["NT"] == ["blue"]
    assert csp.domains["SA"] == ["blue"]
    assert csp.domains["NSW"] == ["red", "blue"]
    assert csp.domains["V"] == ["red", "green", "blue"]
    assert csp.domains["T"] == ["red", "green", "blue"]


def test_forward_check_keeps_integers_apart_from_booleans():
    csp = CSP(
        variables=["A", "B"],
        domains={"A": [True, False], "B": [1, True]},
        constraints=[Distinct(["A", "B"])],
    )
    assert not forward_check(csp, "A", True)
    assert csp.domains["B"] == [1]

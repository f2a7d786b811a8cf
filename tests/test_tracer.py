"""Tests for the search tracer."""

import csv

from src.utils.trace import Tracer


def _record_sample_steps(tracer: Tracer) -> None:
    tracer.log_assign("WA", "red", domain_size=3, assignment_size=1)
    tracer.log_domain_reduction("NT", new_domain_size=2, reason="Forward checking WA=red")
    tracer.log_constraint_check(is_valid=True)
    tracer.log_ac3_run(variables_affected=3, arcs_processed=18)
    tracer.log_forward_check("WA", domains_pruned=2)
    tracer.log_wipeout("SA", reason="AC-3 revising (SA, NT)")
    tracer.log_backtrack("NT", reason="No valid values left after propagation")
    tracer.log_solution_found(assignment_size=7)


def test_tracer_captures_steps():
    tracer = Tracer()
    _record_sample_steps(tracer)

    assert [s.step_number for s in tracer.steps] == list(range(1, 9))
    summary = tracer.summary()
    assert summary["total_steps"] == 8
    assert summary["num_assignments"] == 1
    assert summary["num_backtracks"] == 1
    assert summary["num_checks"] == 1
    assert summary["action_counts"]["wipeout"] == 1
    assert tracer.steps[0].value == "red"


def test_disabled_tracer_only_counts_checks():
    tracer = Tracer(enabled=False)
    _record_sample_steps(tracer)
    assert tracer.steps == []
    assert tracer.checks == 1


def test_to_csv(tmp_path):
    tracer = Tracer()
    _record_sample_steps(tracer)
    output_path = tmp_path / "nested" / "trace.csv"
    tracer.to_csv(output_path)

    with open(output_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 8
    assert rows[0]["action_type"] == "assign"
    assert rows[-1]["action_type"] == "solution_found"


def test_to_csv_without_steps_writes_nothing(tmp_path):
    output_path = tmp_path / "trace.csv"
    Tracer().to_csv(output_path)
    assert not output_path.exists()

"""Tracing module: records CSP search steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.utils.logging_utils import get_logger

logger = get_logger()


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'assign', 'backtrack', 'constraint_check', 'domain_reduced', 'ac3', etc.
    variable: Optional[str] = None
    value: Optional[Any] = None
    domain_size: Optional[int] = None
    assignment_size: Optional[int] = None
    constraint_checked: Optional[str] = None
    is_valid: Optional[bool] = None
    reason: Optional[str] = None


class Tracer:
    """
    Records solver steps for logging and analysis.

    One tracer belongs to one solve call and is handed down explicitly, so
    counts from separate runs never mix.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0
        # Validation calls are counted even when step recording is off.
        self.checks = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_assign(self, variable: str, value: Any, domain_size: int, assignment_size: int):
        """Log a variable assignment."""
        if not self.enabled:
            return
        self._record(
            'assign',
            variable=variable,
            value=str(value),
            domain_size=domain_size,
            assignment_size=assignment_size,
        )

    def log_backtrack(self, variable: str, reason: str = "No valid values"):
        """Log a backtrack event."""
        if not self.enabled:
            return
        self._record('backtrack', variable=variable, reason=reason)

    def log_constraint_check(self, is_valid: bool, strict: bool = False, variable: Optional[str] = None):
        """Log one full validation of an assignment against the constraint set."""
        self.checks += 1
        if not self.enabled:
            return
        self._record(
            'constraint_check',
            constraint_checked="strict" if strict else "full",
            is_valid=is_valid,
            variable=variable,
        )

    def log_domain_reduction(self, variable: str, new_domain_size: int, reason: str = ""):
        """Log domain reduction for a variable."""
        if not self.enabled:
            return
        self._record('domain_reduced', variable=variable, domain_size=new_domain_size, reason=reason)

    def log_ac3_run(self, variables_affected: int, arcs_processed: int):
        """Log an AC-3 arc consistency pass."""
        if not self.enabled:
            return
        self._record('ac3', reason=f"Affected {variables_affected} vars, processed {arcs_processed} arcs")

    def log_forward_check(self, variable: str, domains_pruned: int):
        """Log forward checking."""
        if not self.enabled:
            return
        self._record(
            'forward_check',
            variable=variable,
            reason=f"Pruned {domains_pruned} values from other domains",
        )

    def log_wipeout(self, variable: str, reason: str):
        """Log a domain emptied by propagation."""
        if not self.enabled:
            return
        self._record('wipeout', variable=variable, domain_size=0, reason=reason)

    def log_solution_found(self, assignment_size: int):
        """Log when a solution is found."""
        if not self.enabled:
            return
        self._record('solution_found', assignment_size=assignment_size)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            logger.info("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'variable', 'value',
            'domain_size', 'assignment_size', 'constraint_checked', 'is_valid', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        logger.info("Trace written to %s (%d steps)", filepath, len(self.steps))

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_assignments': action_counts.get('assign', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'num_checks': self.checks,
        }

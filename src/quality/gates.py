"""Quality Gate - Decision maker for pass/fail."""

import logging
from dataclasses import dataclass

from src.config.quality_config import DQ_MIN_FACT_ROWS
from .validators import IntegrityResult

logger = logging.getLogger(__name__)


class ValidationHardFailError(Exception):
    """Raised when validation fails hard."""
    pass


@dataclass
class GateResult:
    """Quality gate result."""
    status: str  # 'success', 'failed'
    fact_rows: int
    message: str


class QualityGate:
    """Decision maker for pass/fail based on integrity results."""

    def __init__(self, min_fact_rows: int = None):
        self.min_fact_rows = DQ_MIN_FACT_ROWS if min_fact_rows is None else min_fact_rows

    def evaluate(self, result: IntegrityResult) -> GateResult:
        """Evaluate integrity result. Raises ValidationHardFailError on hard fail."""

        if result.fact_rows < self.min_fact_rows:
            raise ValidationHardFailError(
                f'Fact row count {result.fact_rows} below minimum {self.min_fact_rows}'
            )

        if result.total_duplicates > 0:
            dims = {k: v for k, v in result.duplicate_keys.items() if v}
            raise ValidationHardFailError(f'Duplicate dimension keys: {dims}')

        if result.total_orphans > 0:
            cols = {k: v for k, v in result.orphan_keys.items() if v}
            raise ValidationHardFailError(f'Fact rows with unresolved keys: {cols}')

        logger.info(f'Integrity gate passed: {result.fact_rows} facts, all keys resolved')
        return GateResult('success', result.fact_rows, f'Passed: {result.fact_rows} facts')

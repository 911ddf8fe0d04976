"""ETL Metrics Logger - Track pipeline stage performance."""

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ETLMetrics:
    """ETL stage metrics."""
    pipeline_id: str
    task_id: str
    run_id: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_seconds: float = 0.0
    rows_in: int = 0
    rows_out: int = 0
    status: str = 'running'
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def throughput(self) -> float:
        """Rows per second."""
        if self.duration_seconds > 0:
            return self.rows_out / self.duration_seconds
        return 0.0


class ETLMetricsLogger:
    """Collects stage metrics for one run and writes them to the log."""

    def __init__(self, run_id: str = None):
        self.run_id = run_id
        self.history: List[ETLMetrics] = []

    def log(self, metrics: ETLMetrics) -> bool:
        """Record metrics and emit a log line."""
        self.history.append(metrics)
        extra = f" metadata={json.dumps(metrics.metadata, default=str)}" if metrics.metadata else ""
        if metrics.status == 'failed':
            logger.warning(
                f"ETL metrics: {metrics.task_id} failed after {metrics.duration_seconds:.3f}s: {metrics.error_message}"
            )
        else:
            logger.info(
                f"ETL metrics: {metrics.task_id} - {metrics.rows_in} in, {metrics.rows_out} out "
                f"in {metrics.duration_seconds:.3f}s{extra}"
            )
        return True

    def summary(self) -> Dict[str, Dict[str, Any]]:
        return {
            m.task_id: {
                'status': m.status,
                'rows_in': m.rows_in,
                'rows_out': m.rows_out,
                'duration_seconds': round(m.duration_seconds, 4),
            }
            for m in self.history
        }

    @contextmanager
    def track(self, pipeline_id: str, task_id: str):
        """Context manager to track task duration and metrics."""
        metrics = ETLMetrics(
            pipeline_id=pipeline_id,
            task_id=task_id,
            run_id=self.run_id,
            start_time=datetime.now()
        )
        start = time.time()

        try:
            yield metrics
            metrics.status = 'success'
        except Exception as e:
            metrics.status = 'failed'
            metrics.error_message = str(e)
            raise
        finally:
            metrics.end_time = datetime.now()
            metrics.duration_seconds = time.time() - start
            self.log(metrics)

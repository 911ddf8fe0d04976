"""Quality module - Star schema validation and quality gates."""

from .validators import StarSchemaValidator, IntegrityResult, FOREIGN_KEYS
from .gates import QualityGate, GateResult, ValidationHardFailError

__all__ = [
    'StarSchemaValidator', 'IntegrityResult', 'FOREIGN_KEYS',
    'QualityGate', 'GateResult', 'ValidationHardFailError',
]

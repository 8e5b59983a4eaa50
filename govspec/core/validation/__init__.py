"""Contract validation for normalized spec trees.

The validator is pure: it never repairs a tree, it only reports itemized
violations against an injected contract lock.
"""

from .models import ValidationResult, Violation, ViolationCode
from .validator import declared_contract_version, declared_schema_version, validate_spec_tree

__all__ = [
    "ValidationResult",
    "Violation",
    "ViolationCode",
    "declared_contract_version",
    "declared_schema_version",
    "validate_spec_tree",
]

"""Contract lock for the governed-spec export engine.

The contract lock is the single source of truth for versioning and the
action taxonomy. Changes to its defaults are contract changes.

Governance rules:
- Contract version changes require system-wide approval.
- Schema versions must be explicitly supported.
- The action taxonomy is frozen (no runtime registration).
- Required-target actions must carry a non-empty target.
"""

from .exceptions import (
    ActionRejected,
    ContractConfigurationError,
    GovSpecError,
    MalformedActionError,
    MalformedSpecError,
    ManifestError,
    MissingTargetError,
    UnknownActionError,
)
from .registry import BUILD_MODES, DEFAULT_CONTRACT, ContractRegistry, check_contract_consistency, load_contract_lock
from .taxonomy import REQUIRED_TARGET_TAGS, Action, ActionTag, parse_action, raw_action_fields

__all__ = [
    "GovSpecError",
    "ContractConfigurationError",
    "MalformedSpecError",
    "ManifestError",
    "ActionRejected",
    "UnknownActionError",
    "MissingTargetError",
    "MalformedActionError",
    "BUILD_MODES",
    "DEFAULT_CONTRACT",
    "ContractRegistry",
    "check_contract_consistency",
    "load_contract_lock",
    "ActionTag",
    "REQUIRED_TARGET_TAGS",
    "Action",
    "parse_action",
    "raw_action_fields",
]

from __future__ import annotations


class GovSpecError(Exception):
    """
    Base exception for all governed-spec pipeline failures.
    """

    pass


class ContractConfigurationError(GovSpecError):
    """
    Raised when the contract lock itself is internally contradictory.

    This is a governance bug, not a data bug: it must stop the process
    before any input is exported.
    """

    pass


class MalformedSpecError(GovSpecError):
    """
    Raised when a spec tree lacks structure the normalizer cannot default.
    """

    def __init__(self, message: str, *, section_index: int | None = None) -> None:
        super().__init__(message)
        self.section_index = section_index


class ManifestError(GovSpecError):
    """
    Raised when a batch manifest entry is unusable.
    """

    pass


class ActionRejected(GovSpecError):
    """
    Raised by boundary action parsing. The validator converts these into
    violations; they never escape validation.
    """

    code: str = "malformed_action"

    def __init__(self, message: str, *, tag: str | None = None) -> None:
        super().__init__(message)
        self.tag = tag


class UnknownActionError(ActionRejected):
    code = "unknown_action"


class MissingTargetError(ActionRejected):
    code = "missing_target"


class MalformedActionError(ActionRejected):
    code = "malformed_action"

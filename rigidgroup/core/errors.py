"""Validation errors reported by manifold and group checks."""

from typing import Any, List, Optional, Sequence


class ManifoldDomainError(ValueError):
    """A point or tangent vector violates one membership condition.

    Attributes:
        value: The offending value (a row, a block, a vector)
        message: Human readable description of the violation
    """

    def __init__(self, value: Any, message: str):
        super().__init__(message)
        self.value = value
        self.message = message


class CompositeManifoldError(ManifoldDomainError):
    """Several independent violations reported together."""

    def __init__(self, errors: Sequence[ManifoldDomainError]):
        self.errors: List[ManifoldDomainError] = list(errors)
        lines = [f"{len(self.errors)} errors:"]
        lines.extend(f"  - {e.message}" for e in self.errors)
        super().__init__(None, "\n".join(lines))

    def __len__(self) -> int:
        return len(self.errors)


def collect_errors(errors: Sequence[Optional[ManifoldDomainError]]) -> Optional[ManifoldDomainError]:
    """Combine check results into a single report.

    Args:
        errors: Results of individual checks, ``None`` meaning the check passed

    Returns:
        None if every check passed, the only error if exactly one failed,
        otherwise a CompositeManifoldError listing all of them
    """
    found = [e for e in errors if e is not None]
    if len(found) > 1:
        return CompositeManifoldError(found)
    return found[0] if found else None

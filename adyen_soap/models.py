from dataclasses import asdict, dataclass, field
from typing import List


@dataclass
class ValidationReport:
    """
    Outcome of a pre-flight check on caller-supplied details.

    Attributes:
        is_valid (bool): True if no format or checksum errors were found.
        errors (List[str]): One message per failed rule.
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

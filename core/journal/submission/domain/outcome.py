"""Results of evaluating a step gate."""

from typing import Dict, Iterable, List

from dataclasses import dataclass, field


@dataclass
class ValidationOutcome:
    """Field-level errors and non-blocking warnings."""

    errors: Dict[str, str] = field(default_factory=dict)
    """Keyed by field; multiple violations on a field are joined."""

    warnings: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """Evaluate whether there are no errors."""
        return not self.errors

    def add_errors(self, name: str, messages: Iterable[str]) -> None:
        """Record the violations for a field, if there are any."""
        messages = [msg for msg in messages if msg]
        if not messages:
            return
        if name in self.errors:
            messages = [self.errors[name]] + messages
        self.errors[name] = '; '.join(messages)

    def update(self, other: 'ValidationOutcome') -> None:
        """Merge another outcome into this one."""
        for name, message in other.errors.items():
            self.add_errors(name, [message])
        self.warnings.extend(other.warnings)

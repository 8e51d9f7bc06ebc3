"""Form State & Mutation Results — the tagged outcome of one form submission.

Invariants:
    - A submission ends in exactly one of Ok, Invalid, Failed (never both errors and a redirect)
    - Invalid carries ONLY the failing fields; valid fields never appear in errors
    - Failed carries a generic reason, never field errors or driver messages
    - Ok.redirect_to is None for mutations that stay on the current page (delete)

Design Decisions:
    - Frozen dataclasses over a status string: callers match on type, not on magic values
    - FormState is the wire shape returned to the UI for both Invalid and Failed
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FormState:
    """Per-field messages plus an optional top-level message for one submission."""
    errors: dict[str, list[str]] = field(default_factory=dict)
    message: str | None = None

    def to_dict(self) -> dict:
        return {"errors": self.errors, "message": self.message}


@dataclass(frozen=True)
class Ok:
    """Committed: cache invalidated, caller should navigate to redirect_to."""
    redirect_to: str | None = None


@dataclass(frozen=True)
class Invalid:
    """Rejected during validation: nothing reached the store."""
    state: FormState


@dataclass(frozen=True)
class Failed:
    """Persistence failed after validation succeeded."""
    reason: str

    @property
    def state(self) -> FormState:
        return FormState(message=self.reason)


MutationResult = Ok | Invalid | Failed

"""
Application status state machine.

    pending --> accepted
    pending --> rejected

``accepted`` and ``rejected`` are terminal: re-submitting a terminal status,
or moving between terminal states, is refused rather than treated as a no-op.
"""
from applications.models import Application
from .exceptions import InvalidStatus


PENDING = Application.Status.PENDING
ACCEPTED = Application.Status.ACCEPTED
REJECTED = Application.Status.REJECTED

TRANSITIONS = {
    PENDING: frozenset({ACCEPTED, REJECTED}),
    ACCEPTED: frozenset(),
    REJECTED: frozenset(),
}

# Values a client may ask for; "pending" is only ever set on creation
REQUESTABLE = frozenset().union(*TRANSITIONS.values())


def parse_requested_status(value):
    """Return the requested status or raise InvalidStatus for anything else."""
    if value not in REQUESTABLE:
        raise InvalidStatus()
    return value


def is_terminal(current):
    """Unknown statuses count as terminal so nothing can move out of them."""
    return not TRANSITIONS.get(current)


def check_transition(current, requested):
    requested = parse_requested_status(requested)
    if is_terminal(current) or requested not in TRANSITIONS[current]:
        raise InvalidStatus(f"Application is already {current}")
    return requested

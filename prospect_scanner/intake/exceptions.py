class IntakeError(Exception):
    """Raised when a user-supplied path cannot be taken in."""

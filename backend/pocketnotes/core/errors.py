class NoActiveSessionError(RuntimeError):
    """Raised when a note operation runs without a logged-in user."""

    def __init__(self, message: str = "No user is logged in"):
        super().__init__(message)


class NoteNotFoundError(LookupError):
    """Raised when a note picked in the UI is no longer in the collection."""

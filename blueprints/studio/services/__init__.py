"""
Studio services: snapshot holder and backend mutations.
"""


class NotFoundError(LookupError):
    """Referenced record is not in the current snapshot."""

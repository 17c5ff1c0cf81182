"""Errors raised by the pantry engine."""


class NotFoundError(LookupError):
    """A recipe, pantry item or undo token does not exist for the caller.

    Ownership mismatches raise this too, so callers cannot discover
    resources that belong to someone else.
    """

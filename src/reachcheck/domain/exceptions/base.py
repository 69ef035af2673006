"""Base exceptions for reachcheck domain."""


class ReachCheckError(Exception):
    """Root exception for all reachcheck errors.

    All domain exceptions inherit from this.
    Allows catching all reachcheck-specific errors.
    """

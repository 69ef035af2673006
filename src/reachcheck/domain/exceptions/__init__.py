"""Domain exceptions."""

from reachcheck.domain.exceptions.analysis import (
    AnalysisError,
    SourceRootNotFoundError,
    UnsupportedEcosystemError,
)
from reachcheck.domain.exceptions.base import ReachCheckError
from reachcheck.domain.exceptions.configuration import ConfigurationError
from reachcheck.domain.exceptions.parsing import ParsingError

__all__ = [
    "ReachCheckError",
    "ParsingError",
    "ConfigurationError",
    "AnalysisError",
    "UnsupportedEcosystemError",
    "SourceRootNotFoundError",
]

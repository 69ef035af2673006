"""Application services: component matching and verdict classification."""

from reachcheck.application.services.classifier import ClassificationEngine
from reachcheck.application.services.matcher import ComponentMatcher, ImportIndex

__all__ = [
    "ClassificationEngine",
    "ComponentMatcher",
    "ImportIndex",
]

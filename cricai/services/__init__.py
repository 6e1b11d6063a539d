"""Service layer: fallback orchestration and resource declarations."""

from cricai.services.fallback import FallbackOrchestrator
from cricai.services.resources import MatchResources, ResourceSpec

__all__ = ["FallbackOrchestrator", "MatchResources", "ResourceSpec"]

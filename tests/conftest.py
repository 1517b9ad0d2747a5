"""Shared pytest fixtures for overwire tests."""

import pytest

from overwire.bridge import OverloadBridge
from overwire.candidates import SignatureCandidateSource
from overwire.compatibility import TypeCompatibilityRanker
from overwire.resolution import OverloadResolver
from overwire.singletons import ScopedSingletonCache


@pytest.fixture()
def ranker() -> TypeCompatibilityRanker:
    """Default Python type ranker."""
    return TypeCompatibilityRanker()


@pytest.fixture()
def resolver(ranker: TypeCompatibilityRanker) -> OverloadResolver:
    """Resolver using the default ranker."""
    return OverloadResolver(ranker)


@pytest.fixture()
def candidate_source() -> SignatureCandidateSource:
    """Signature-based candidate source with default policies."""
    return SignatureCandidateSource()


@pytest.fixture()
def bridge() -> OverloadBridge:
    """Bridge with the default ranker and candidate source."""
    return OverloadBridge()


@pytest.fixture()
def cache() -> ScopedSingletonCache:
    """Empty thread-locked singleton cache requiring write-protected instances."""
    return ScopedSingletonCache()

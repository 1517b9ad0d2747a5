from overwire._internal.policies import DefaultedParametersPolicy
from overwire.bridge import OverloadBridge
from overwire.candidates import CandidateSource, SignatureCandidateSource
from overwire.compatibility import (
    Compatibility,
    CompatibilityLevel,
    CompatibilityRanker,
    TypeCompatibilityRanker,
)
from overwire.descriptors import ArgumentProfile, CallableDescriptor
from overwire.exceptions import (
    OverwireAmbiguousOverloadError,
    OverwireConstructionContractViolationError,
    OverwireError,
    OverwireInvalidDescriptorError,
    OverwireInvalidSettingsError,
    OverwireInvalidTargetError,
    OverwireInvocationError,
    OverwireNoApplicableOverloadError,
    OverwireResolutionError,
)
from overwire.invoker import Invoker, pack_arguments
from overwire.lock_mode import LockMode
from overwire.resolution import Ambiguous, Found, NoMatch, OverloadResolver, ResolutionOutcome
from overwire.singletons import DuplicableSettings, ScopedSingletonCache, WriteProtected

__all__ = [
    "Ambiguous",
    "ArgumentProfile",
    "CallableDescriptor",
    "CandidateSource",
    "Compatibility",
    "CompatibilityLevel",
    "CompatibilityRanker",
    "DefaultedParametersPolicy",
    "DuplicableSettings",
    "Found",
    "Invoker",
    "LockMode",
    "NoMatch",
    "OverloadBridge",
    "OverloadResolver",
    "OverwireAmbiguousOverloadError",
    "OverwireConstructionContractViolationError",
    "OverwireError",
    "OverwireInvalidDescriptorError",
    "OverwireInvalidSettingsError",
    "OverwireInvalidTargetError",
    "OverwireInvocationError",
    "OverwireNoApplicableOverloadError",
    "OverwireResolutionError",
    "ResolutionOutcome",
    "ScopedSingletonCache",
    "SignatureCandidateSource",
    "TypeCompatibilityRanker",
    "WriteProtected",
    "pack_arguments",
]

"""Completion hints: provider registry, dispatch, result model and events."""
from codehints.hints.dispatcher import CompletionDispatcher
from codehints.hints.events import HintsEvents
from codehints.hints.host import HINT_HELPER, HintsHost, InMemoryHost
from codehints.hints.marshal import HintBag, HintsBag, decode_hint
from codehints.hints.options import HintsOptions, bool_option, raw_option
from codehints.hints.providers import (
    AsyncProvider,
    InvalidProviderError,
    Provider,
    SyncProvider,
)
from codehints.hints.registry import Hints, ProviderRegistry
from codehints.hints.results import HintResult, HintResults

__all__ = [
    "CompletionDispatcher",
    "HintsEvents",
    "HINT_HELPER",
    "HintsHost",
    "InMemoryHost",
    "HintBag",
    "HintsBag",
    "decode_hint",
    "HintsOptions",
    "bool_option",
    "raw_option",
    "AsyncProvider",
    "InvalidProviderError",
    "Provider",
    "SyncProvider",
    "Hints",
    "ProviderRegistry",
    "HintResult",
    "HintResults",
]

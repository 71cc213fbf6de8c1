from .dispatcher import maybe_sync, preflight
from .model import RemoteTarget, RevisionFacts, ServiceDescriptor
from .resolver import resolve_changed_files

__version__ = "0.1.0"

__all__ = [
    "maybe_sync",
    "preflight",
    "resolve_changed_files",
    "RemoteTarget",
    "RevisionFacts",
    "ServiceDescriptor",
]

# ABOUTME: Scanning package: decoder adapter, scan gate, notifier, and the reconciliation pipeline.
# ABOUTME: build_pipeline() wires the default collaborators together.

from collections.abc import Callable

from shelfscan.db.collection import BookCollection
from shelfscan.metadata.resolver import MetadataResolver
from shelfscan.scanning.gate import IsbnPolicy, ScanGate
from shelfscan.scanning.notifier import DEFAULT_COOLDOWN, Notifier, Scheduler
from shelfscan.scanning.outcomes import Duplicate, Error, NotFound, Outcome, Success
from shelfscan.scanning.pipeline import ScanPipeline


def build_pipeline(
    resolver: MetadataResolver,
    collection: BookCollection,
    *,
    policy: IsbnPolicy = IsbnPolicy.STRICT,
    cooldown: float = DEFAULT_COOLDOWN,
    category: str | None = None,
    acknowledge: Callable[[], None] | None = None,
    scheduler: Scheduler | None = None,
    sink: Callable[[Outcome, str], None] | None = None,
) -> ScanPipeline:
    """Assemble gate, notifier and pipeline around a resolver and a collection."""
    gate = ScanGate(policy=policy, acknowledge=acknowledge)
    notifier = Notifier(gate, scheduler=scheduler, cooldown=cooldown, sink=sink)
    return ScanPipeline(gate, resolver, collection, notifier, category=category)


__all__ = [
    "Duplicate",
    "Error",
    "IsbnPolicy",
    "NotFound",
    "Notifier",
    "Outcome",
    "ScanGate",
    "ScanPipeline",
    "Success",
    "build_pipeline",
]

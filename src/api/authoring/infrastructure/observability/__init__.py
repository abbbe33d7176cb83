"""Domain-Oriented Observability for the authoring infrastructure layer."""

from authoring.infrastructure.observability.sequence_store_probe import (
    DefaultSequenceStoreProbe,
    SequenceStoreProbe,
)

__all__ = [
    "DefaultSequenceStoreProbe",
    "SequenceStoreProbe",
]

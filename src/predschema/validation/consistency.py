"""Opt-in check that denormalized convenience fields agree with Relationships.

Not part of the publish gate: records from producers that populate only one
side (or disagree) still pass validate(). Callers that want the invariant
enforced run check_relationships() as well.
"""

from __future__ import annotations

from typing import Iterator

from predschema.errors import ValidationError
from predschema.models.metadata import DiscoveryRecord, EventMetadata, SeriesMetadata


def relationship_errors(record: DiscoveryRecord) -> Iterator[ValidationError]:
    rel = record.relationships
    if rel is None:
        return
    if isinstance(record, SeriesMetadata):
        if record.child_event_ids and rel.event_ids and set(record.child_event_ids) != set(rel.event_ids):
            yield ValidationError("child_event_ids", "must match relationships.event_ids")
    elif isinstance(record, EventMetadata):
        if record.parent_series_id and rel.series_id and record.parent_series_id != rel.series_id:
            yield ValidationError("parent_series_id", "must match relationships.series_id")


def check_relationships(record: DiscoveryRecord) -> None:
    """Raise ValidationError if a convenience field disagrees with its relationship."""
    for err in relationship_errors(record):
        raise err

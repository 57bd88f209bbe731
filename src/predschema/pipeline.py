"""Discovery run: venue records -> mapper -> validator gate -> batch payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

import structlog

from predschema.config import Settings
from predschema.envelope import build_batch
from predschema.errors import PayloadParseError, SchemaError, ValidationError
from predschema.mapping import get_mapper
from predschema.models import DiscoveryPayload, EventMetadata, SeriesMetadata
from predschema.validation import check_relationships, validate

log = structlog.get_logger(__name__)


@dataclass
class DiscoveryResult:
    """Outcome of one run: publishable payloads plus the records the gate rejected."""

    payloads: list[DiscoveryPayload] = field(default_factory=list)
    rejected: list[tuple[dict[str, Any], SchemaError]] = field(default_factory=list)

    @property
    def accepted_count(self) -> int:
        return len(self.payloads)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)


def run_discovery(
    venue_id: str,
    kind: str,
    native_records: Iterable[dict[str, Any]],
    event_type: str,
    discovery_run_id: str,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> DiscoveryResult:
    """Map, validate and wrap native records.

    Records that cannot be mapped or fail validation are logged and skipped; one
    bad record never aborts the run.
    """
    settings = settings or Settings()
    now = now or datetime.now(timezone.utc)
    mapper = get_mapper(venue_id)
    result = DiscoveryResult()
    accepted: list[EventMetadata | SeriesMetadata] = []
    for raw in native_records:
        try:
            record = mapper.map(kind, raw, now)
        except PayloadParseError as e:
            log.warning("record_unmappable", venue=venue_id, kind=kind, error=str(e))
            result.rejected.append((raw, e))
            continue
        try:
            validate(record)
            if settings.check_relationships:
                check_relationships(record)
        except ValidationError as e:
            log.warning(
                "record_rejected",
                venue=venue_id,
                kind=kind,
                event_id=record.event_id,
                field=e.path,
                error=e.message,
            )
            result.rejected.append((raw, e))
            continue
        accepted.append(record)
    result.payloads = build_batch(
        accepted,
        event_type,
        discovery_run_id,
        now=now,
        id_prefix=settings.message_id_prefix,
    )
    log.info(
        "discovery_run_complete",
        venue=venue_id,
        kind=kind,
        run_id=discovery_run_id,
        accepted=result.accepted_count,
        rejected=result.rejected_count,
    )
    return result

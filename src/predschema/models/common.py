"""SchemaModel base and the nested value objects shared by discovery records."""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, SerializerFunctionWrapHandler, model_serializer


class SchemaModel(BaseModel):
    """Base for every wire type: optional fields are omitted from output when absent.

    Fields listed in ``always_emit`` are written even when ``None``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    always_emit: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None or k in self.always_emit}


class Relationships(SchemaModel):
    """Parent/child cross references. Events set series_id; series set event_ids."""

    series_id: str | None = None
    event_ids: list[str] | None = None
    instrument_ids: list[str] | None = None


class Financial(SchemaModel):
    """Volume and liquidity aggregates. USD amounts are cents-precise."""

    volume_24h_usd: float | None = None
    volume_total_usd: float | None = None
    liquidity_total_usd: float | None = None
    volume_24h_contracts: int | None = None
    volume_total_contracts: int | None = None
    score: float | None = None
    currency: str | None = None


class Status(SchemaModel):
    archived: bool | None = None
    is_new: bool | None = None
    featured: bool | None = None
    restricted: bool | None = None
    is_template: bool | None = None
    competitive: str | None = None
    comments_enabled: bool | None = None


class SettlementSource(SchemaModel):
    name: str = ""
    url: str | None = None


class Contract(SchemaModel):
    """Contract terms and settlement sources of a series."""

    contract_url: str | None = None
    contract_terms_url: str | None = None
    fee_type: str | None = None
    fee_multiplier: float | None = None
    additional_prohibitions: list[str] | None = None
    settlement_sources: list[SettlementSource] | None = None


class Timestamps(SchemaModel):
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Creators(SchemaModel):
    created_by: str | None = None
    updated_by: str | None = None


class SeriesData(SchemaModel):
    """Series-specific aggregate; every section is independently optional."""

    ticker: str | None = None
    slug: str | None = None
    subtitle: str | None = None
    series_type: str | None = None
    recurrence: str | None = None
    image_url: str | None = None
    icon_url: str | None = None
    layout: str | None = None
    financial: Financial | None = None
    status: Status | None = None
    contract: Contract | None = None
    timestamps: Timestamps | None = None
    creators: Creators | None = None

"""Auction domain model: states, kinds, bid terms and managing authority."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import date
from decimal import Decimal
from enum import Enum

from boewatch.infrastructure.observability.logging import get_logger

from .concepts import BoeConcept, ConceptMap
from .normalize import normalize
from .values import (
    DEFAULT_DATE,
    ZERO,
    clean_text,
    format_money,
    parse_date,
    parse_int,
    parse_money,
    text_or_default,
)

LOGGER = get_logger(__name__)


class AuctionState(str, Enum):
    """Enumeration of auction states as reported by the listing pages."""

    TO_BE_OPENED = "to_be_opened"
    ONGOING = "ongoing"
    SUSPENDED = "suspended"
    FINISHED = "finished"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str | None) -> "AuctionState":
        """Convert listing text such as ``"Celebrándose"`` to a state.

        Unrecognized text is logged and mapped to UNKNOWN.
        """
        if not value:
            return cls.UNKNOWN
        state = _STATE_LABELS.get(normalize(value.strip()))
        if state is None:
            LOGGER.warning("Unknown auction state %r", value)
            return cls.UNKNOWN
        return state

    @property
    def is_terminal(self) -> bool:
        return self in (AuctionState.FINISHED, AuctionState.CANCELLED)


_STATE_LABELS = {
    "PROXIMA": AuctionState.TO_BE_OPENED,
    "PROXIMAAPERTURA": AuctionState.TO_BE_OPENED,
    "CELEBRANDOSE": AuctionState.ONGOING,
    "SUSPENDIDA": AuctionState.SUSPENDED,
    "CONCLUIDA": AuctionState.FINISHED,
    "CONCLUIDAENPORTALDESUBASTAS": AuctionState.FINISHED,
    "CANCELADA": AuctionState.CANCELLED,
}

# Auctions worth re-checking during a refresh pass.
ACTIVE_STATES = (AuctionState.ONGOING, AuctionState.TO_BE_OPENED, AuctionState.SUSPENDED)


class AuctionKind(str, Enum):
    TAX_AGENCY = "tax_agency"
    TAX_COLLECTION = "tax_collection"
    NOTARY_VOLUNTARY = "notary_voluntary"
    JUDICIAL_VOLUNTARY = "judicial_voluntary"
    JUDICIAL_UNDER_PRESSURE = "judicial_under_pressure"
    BANKRUPTCY = "bankruptcy"
    NOTARY_EXTRA_JUDICIAL = "notary_extra_judicial"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str | None) -> "AuctionKind":
        if not value:
            return cls.UNKNOWN
        return _KIND_LABELS.get(normalize(value.strip()), cls.UNKNOWN)


_KIND_LABELS = {
    normalize("AGENCIA TRIBUTARIA"): AuctionKind.TAX_AGENCY,
    normalize("RECAUDACIÓN TRIBUTARIA"): AuctionKind.TAX_COLLECTION,
    normalize("NOTARIAL VOLUNTARIA"): AuctionKind.NOTARY_VOLUNTARY,
    normalize("JUDICIAL VOLUNTARIA"): AuctionKind.JUDICIAL_VOLUNTARY,
    normalize("JUDICIAL EN VIA DE APREMIO"): AuctionKind.JUDICIAL_UNDER_PRESSURE,
    normalize("JUDICIAL CONCURSAL"): AuctionKind.BANKRUPTCY,
    normalize("NOTARIAL EN VENTA EXTRAJUDICIAL"): AuctionKind.NOTARY_EXTRA_JUDICIAL,
}


class LotAuctionKind(str, Enum):
    """How the assets of an auction are adjudicated."""

    NOT_APPLICABLE = "not_applicable"
    JOINED = "joined"
    SPLITTED = "splitted"

    @classmethod
    def from_string(cls, value: str | None) -> "LotAuctionKind":
        if not value:
            return cls.NOT_APPLICABLE
        return _LOT_KIND_LABELS.get(normalize(value.strip()), cls.NOT_APPLICABLE)

    @property
    def has_lots(self) -> bool:
        return self is not LotAuctionKind.NOT_APPLICABLE


_LOT_KIND_LABELS = {
    normalize("CONJUNTA PARA TODOS LOS LOTES"): LotAuctionKind.JOINED,
    normalize("SEPARADA PARA CADA LOTE"): LotAuctionKind.SPLITTED,
}

_BIDINFO_CONCEPTS = {
    "appraisal": BoeConcept.APPRAISAL,
    "bid_step": BoeConcept.BID_STEP,
    "claim_quantity": BoeConcept.CLAIM_QUANTITY,
    "deposit": BoeConcept.DEPOSIT_AMOUNT,
    "minimum_bid": BoeConcept.MINIMUM_BID,
    "value": BoeConcept.AUCTION_VALUE,
}


@dataclass(frozen=True)
class BidInfo:
    """The six monetary figures governing bidding on an auction or lot."""

    appraisal: Decimal = ZERO
    bid_step: Decimal = ZERO
    claim_quantity: Decimal = ZERO
    deposit: Decimal = ZERO
    minimum_bid: Decimal = ZERO
    value: Decimal = ZERO

    @classmethod
    def from_concepts(cls, data: ConceptMap, base: "BidInfo | None" = None) -> "BidInfo":
        """Build bid terms from a table.

        With ``base``, only the figures present in ``data`` are replaced; the
        rest are inherited from ``base`` (a lot inheriting auction terms).
        """
        if base is None:
            return cls(**{name: parse_money(data.get(c)) for name, c in _BIDINFO_CONCEPTS.items()})
        overrides = {
            name: parse_money(data[concept])
            for name, concept in _BIDINFO_CONCEPTS.items()
            if concept in data
        }
        return replace(base, **overrides)

    def to_packed(self) -> str:
        """Serialize as ``appraisal;bid_step;claim;deposit;minimum;value``."""
        return ";".join(format_money(getattr(self, f.name)) for f in fields(self))

    @classmethod
    def from_packed(cls, packed: str) -> "BidInfo":
        parts = packed.split(";")
        names = [f.name for f in fields(cls)]
        if len(parts) != len(names):
            raise ValueError(f"Invalid packed bid info: {packed!r}")
        return cls(**{name: Decimal(part) for name, part in zip(names, parts)})


@dataclass(frozen=True)
class Management:
    """Authority managing an auction; ``code`` is its business key."""

    code: str
    description: str
    address: str
    telephone: str
    fax: str
    email: str

    @classmethod
    def from_concepts(cls, data: ConceptMap) -> "Management":
        return cls(
            code=text_or_default(data.get(BoeConcept.CODE)),
            description=clean_text(data.get(BoeConcept.DESCRIPTION)),
            address=text_or_default(data.get(BoeConcept.ADDRESS)),
            telephone=text_or_default(data.get(BoeConcept.TELEPHONE)),
            fax=text_or_default(data.get(BoeConcept.FAX)),
            email=text_or_default(data.get(BoeConcept.EMAIL)),
        )


@dataclass
class Auction:
    """One sale event at the registry.

    ``management`` is copied by value when the auction is built. Only
    ``state`` changes after construction (see :meth:`with_state`).
    """

    id: str
    state: AuctionState
    kind: AuctionKind
    claim_quantity: Decimal
    lots: int
    lot_kind: LotAuctionKind
    management: Management
    bidinfo: BidInfo = field(default_factory=BidInfo)
    start_date: date = DEFAULT_DATE
    end_date: date = DEFAULT_DATE
    notice: str = "BOE"

    @classmethod
    def from_concepts(
        cls,
        data: ConceptMap,
        management: Management,
        state: AuctionState = AuctionState.UNKNOWN,
    ) -> "Auction":
        return cls(
            id=text_or_default(data.get(BoeConcept.IDENTIFIER)),
            state=state,
            kind=AuctionKind.from_string(data.get(BoeConcept.AUCTION_KIND)),
            claim_quantity=parse_money(data.get(BoeConcept.CLAIM_QUANTITY)),
            lots=parse_int(data.get(BoeConcept.LOTS)),
            lot_kind=LotAuctionKind.from_string(data.get(BoeConcept.LOT_AUCTION_KIND)),
            management=management,
            bidinfo=BidInfo.from_concepts(data),
            start_date=parse_date(data.get(BoeConcept.START_DATE)),
            end_date=parse_date(data.get(BoeConcept.END_DATE)),
            notice=data.get(BoeConcept.NOTICE, "BOE"),
        )

    def with_state(self, state: AuctionState) -> "Auction":
        return replace(self, state=state)

    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_STATES


__all__ = [
    "ACTIVE_STATES",
    "Auction",
    "AuctionKind",
    "AuctionState",
    "BidInfo",
    "LotAuctionKind",
    "Management",
]

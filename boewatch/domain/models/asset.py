"""Asset records: the properties, vehicles and other goods sold in an auction.

``Asset`` is a closed union of three independent record types with no common
base class; each variant draws its category from its own enumeration.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Union

from .auction import BidInfo
from .concepts import BoeConcept, ConceptMap
from .normalize import InvalidLabelError, normalize
from .taxonomies import OtherCategory, PropertyCategory, Province, VehicleCategory
from .values import clean_text, parse_money, parse_vehicle_date, text_or_default

PROPERTY_HEADER = "INMUEBLE"
VEHICLE_HEADER = "VEHICULO"


@dataclass(frozen=True)
class Coordinates:
    """WGS84 point, longitude first as returned by the geocoder."""

    longitude: float
    latitude: float

    def to_text(self) -> str:
        return f"{self.longitude} {self.latitude}"

    @classmethod
    def from_text(cls, text: str) -> "Coordinates":
        lon, lat = text.split()
        return cls(longitude=float(lon), latitude=float(lat))


@dataclass
class Property:
    auction_id: str
    category: PropertyCategory
    address: str
    city: str
    province: Province
    postal_code: str
    description: str
    catastro_reference: str
    owner_status: str
    primary_residence: str
    register_inscription: str
    visitable: str
    charges: Decimal
    bidinfo: BidInfo | None = None
    coordinates: Coordinates | None = None

    kind = "property"

    def with_coordinates(self, coordinates: Coordinates | None) -> "Property":
        return replace(self, coordinates=coordinates)


@dataclass
class Vehicle:
    auction_id: str
    category: VehicleCategory
    brand: str
    model: str
    license_plate: str
    frame_number: str
    licensed_date: date
    localization: str
    description: str
    visitable: str
    charges: Decimal
    bidinfo: BidInfo | None = None

    kind = "vehicle"


@dataclass
class Other:
    auction_id: str
    category: OtherCategory
    description: str
    judicial_title: str
    additional_information: str
    visitable: str
    charges: Decimal
    bidinfo: BidInfo | None = None

    kind = "other"


Asset = Union[Property, Vehicle, Other]


def parse_header(header: str) -> tuple[str, str]:
    """Split ``"BIEN 1 - INMUEBLE (VIVIENDA)"`` into category and subcategory.

    A header without a parenthesised part has an empty subcategory.
    """
    _, dash, rest = header.partition("-")
    if not dash:
        raise InvalidLabelError("asset header", header)
    category, paren, subcategory = rest.partition("(")
    if not paren:
        return category.strip(), ""
    return category.strip(), subcategory.split(")", 1)[0].strip()


def _asset_bidinfo(data: ConceptMap, parent: BidInfo | None) -> BidInfo | None:
    if BoeConcept.AUCTION_VALUE not in data:
        return None
    return BidInfo.from_concepts(data, base=parent)


def build_property(
    auction_id: str,
    category: PropertyCategory,
    data: ConceptMap,
    parent_bidinfo: BidInfo | None = None,
) -> Property:
    return Property(
        auction_id=auction_id,
        category=category,
        address=text_or_default(data.get(BoeConcept.ADDRESS)),
        city=text_or_default(data.get(BoeConcept.CITY)),
        province=Province.from_string(data.get(BoeConcept.PROVINCE, "")),
        postal_code=text_or_default(data.get(BoeConcept.POSTAL_CODE)),
        description=clean_text(data.get(BoeConcept.DESCRIPTION)),
        catastro_reference=text_or_default(data.get(BoeConcept.CATASTRO_REFERENCE)),
        owner_status=text_or_default(data.get(BoeConcept.OWNER_STATUS)),
        primary_residence=text_or_default(data.get(BoeConcept.PRIMARY_RESIDENCE)),
        register_inscription=text_or_default(data.get(BoeConcept.REGISTER_INSCRIPTION)),
        visitable=text_or_default(data.get(BoeConcept.VISITABLE)),
        charges=parse_money(data.get(BoeConcept.CHARGES)),
        bidinfo=_asset_bidinfo(data, parent_bidinfo),
    )


def build_vehicle(
    auction_id: str,
    category: VehicleCategory,
    data: ConceptMap,
    parent_bidinfo: BidInfo | None = None,
) -> Vehicle:
    return Vehicle(
        auction_id=auction_id,
        category=category,
        brand=text_or_default(data.get(BoeConcept.BRAND)),
        model=text_or_default(data.get(BoeConcept.MODEL)),
        license_plate=text_or_default(data.get(BoeConcept.LICENSE_PLATE)),
        frame_number=text_or_default(data.get(BoeConcept.FRAME_NUMBER)),
        licensed_date=parse_vehicle_date(data.get(BoeConcept.LICENSED_DATE)),
        localization=text_or_default(data.get(BoeConcept.LOCALIZATION)),
        description=clean_text(data.get(BoeConcept.DESCRIPTION)),
        visitable=text_or_default(data.get(BoeConcept.VISITABLE)),
        charges=parse_money(data.get(BoeConcept.CHARGES)),
        bidinfo=_asset_bidinfo(data, parent_bidinfo),
    )


def build_other(
    auction_id: str,
    category: OtherCategory,
    data: ConceptMap,
    parent_bidinfo: BidInfo | None = None,
) -> Other:
    return Other(
        auction_id=auction_id,
        category=category,
        description=clean_text(data.get(BoeConcept.DESCRIPTION)),
        judicial_title=text_or_default(data.get(BoeConcept.JUDICIAL_TITLE)),
        additional_information=text_or_default(data.get(BoeConcept.ADDITIONAL_INFORMATION)),
        visitable=text_or_default(data.get(BoeConcept.VISITABLE)),
        charges=parse_money(data.get(BoeConcept.CHARGES)),
        bidinfo=_asset_bidinfo(data, parent_bidinfo),
    )


def build_asset(
    auction_id: str,
    data: ConceptMap,
    parent_bidinfo: BidInfo | None = None,
) -> Asset:
    """Build the asset described by one asset or lot block.

    The block header decides the variant: ``INMUEBLE`` is a property,
    ``VEHÍCULO`` a vehicle and anything else an other-goods asset. An
    unknown subcategory raises InvalidLabelError.
    """
    header = data.get(BoeConcept.HEADER)
    if header is None:
        raise InvalidLabelError("asset header", "")
    category, subcategory = parse_header(header)
    kind = normalize(category)
    if kind == PROPERTY_HEADER:
        return build_property(
            auction_id, PropertyCategory.from_string(subcategory), data, parent_bidinfo
        )
    if kind == VEHICLE_HEADER:
        return build_vehicle(
            auction_id, VehicleCategory.from_string(subcategory), data, parent_bidinfo
        )
    return build_other(auction_id, OtherCategory.from_string(subcategory), data, parent_bidinfo)


__all__ = [
    "Asset",
    "Coordinates",
    "Other",
    "Property",
    "Vehicle",
    "build_asset",
    "build_other",
    "build_property",
    "build_vehicle",
    "parse_header",
]

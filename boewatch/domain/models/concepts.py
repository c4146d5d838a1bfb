"""Field labels harvested from the two-column tables of BOE auction pages."""

from __future__ import annotations

from enum import Enum
from typing import Dict

from .normalize import build_label_index, lookup_label


class BoeConcept(str, Enum):
    """One logical field of an auction, management or asset table."""

    ACQUISITION_DATE = "acquisition_date"
    ADDITIONAL_INFORMATION = "additional_information"
    ADDRESS = "address"
    ALLOTMENT = "allotment"
    APPRAISAL = "appraisal"
    AREA = "area"
    AUCTION_KIND = "auction_kind"
    AUCTION_VALUE = "auction_value"
    BID_STEP = "bid_step"
    BRAND = "brand"
    CATASTRO_REFERENCE = "catastro_reference"
    CHARGES = "charges"
    CITY = "city"
    CLAIM_QUANTITY = "claim_quantity"
    CODE = "code"
    DEPOSIT_AMOUNT = "deposit_amount"
    DESCRIPTION = "description"
    EMAIL = "email"
    END_DATE = "end_date"
    FAX = "fax"
    FRAME_NUMBER = "frame_number"
    HEADER = "header"
    IDENTIFIER = "identifier"
    IDUFIR = "idufir"
    JUDICIAL_TITLE = "judicial_title"
    LICENSED_DATE = "licensed_date"
    LICENSE_PLATE = "license_plate"
    LOCALIZATION = "localization"
    LOT_AUCTION_KIND = "lot_auction_kind"
    LOTS = "lots"
    MINIMUM_BID = "minimum_bid"
    MODEL = "model"
    NOTICE = "notice"
    OWNER_STATUS = "owner_status"
    PLACE = "place"
    POSTAL_CODE = "postal_code"
    PRIMARY_RESIDENCE = "primary_residence"
    PROVINCE = "province"
    QUOTA = "quota"
    REGISTER_INSCRIPTION = "register_inscription"
    START_DATE = "start_date"
    TELEPHONE = "telephone"
    VISITABLE = "visitable"

    @property
    def label(self) -> str:
        """Canonical label as printed by the registry."""
        return _LABELS[self][0]

    @classmethod
    def from_label(cls, text: str) -> "BoeConcept":
        """Parse a table header cell; unknown labels raise InvalidLabelError."""
        return lookup_label(_INDEX, "concept", text)


_LABELS: dict[BoeConcept, tuple[str, ...]] = {
    BoeConcept.ACQUISITION_DATE: ("FECHA ADQUISICIÓN", "FECHA DE ADQUISICIÓN"),
    BoeConcept.ADDITIONAL_INFORMATION: ("INFORMACIÓN ADICIONAL",),
    BoeConcept.ADDRESS: ("DIRECCIÓN",),
    BoeConcept.ALLOTMENT: ("PARCELA",),
    BoeConcept.APPRAISAL: ("TASACIÓN", "VALOR DE TASACIÓN"),
    BoeConcept.AREA: ("SUPERFICIE",),
    BoeConcept.AUCTION_KIND: ("TIPO DE SUBASTA",),
    BoeConcept.AUCTION_VALUE: ("VALOR SUBASTA",),
    BoeConcept.BID_STEP: ("TRAMOS ENTRE PUJAS",),
    BoeConcept.BRAND: ("MARCA",),
    BoeConcept.CATASTRO_REFERENCE: ("REFERENCIA CATASTRAL",),
    BoeConcept.CHARGES: ("CARGAS",),
    BoeConcept.CITY: ("LOCALIDAD",),
    BoeConcept.CLAIM_QUANTITY: ("CANTIDAD RECLAMADA",),
    BoeConcept.CODE: ("CÓDIGO",),
    BoeConcept.DEPOSIT_AMOUNT: ("IMPORTE DEL DEPÓSITO",),
    BoeConcept.DESCRIPTION: ("DESCRIPCIÓN",),
    BoeConcept.EMAIL: ("CORREO ELECTRÓNICO",),
    BoeConcept.END_DATE: ("FECHA DE CONCLUSIÓN",),
    BoeConcept.FAX: ("FAX",),
    BoeConcept.FRAME_NUMBER: ("NÚMERO DE BASTIDOR",),
    BoeConcept.HEADER: ("HEADER",),
    BoeConcept.IDENTIFIER: ("IDENTIFICADOR",),
    BoeConcept.IDUFIR: ("IDUFIR",),
    BoeConcept.JUDICIAL_TITLE: ("TÍTULO JURÍDICO",),
    BoeConcept.LICENSED_DATE: ("FECHA MATRICULACIÓN", "FECHA DE MATRICULACIÓN"),
    BoeConcept.LICENSE_PLATE: ("MATRÍCULA",),
    BoeConcept.LOCALIZATION: ("DEPÓSITO",),
    BoeConcept.LOT_AUCTION_KIND: ("FORMA DE ADJUDICACIÓN", "FORMA ADJUDICACIÓN"),
    BoeConcept.LOTS: ("LOTES",),
    BoeConcept.MINIMUM_BID: ("PUJA MÍNIMA",),
    BoeConcept.MODEL: ("MODELO",),
    BoeConcept.NOTICE: ("ANUNCIO BOE",),
    BoeConcept.OWNER_STATUS: ("SITUACIÓN POSESORIA",),
    BoeConcept.PLACE: ("PARAJE", "NOMBRE PARAJE"),
    BoeConcept.POSTAL_CODE: ("CÓDIGO POSTAL",),
    BoeConcept.PRIMARY_RESIDENCE: ("VIVIENDA HABITUAL",),
    BoeConcept.PROVINCE: ("PROVINCIA",),
    BoeConcept.QUOTA: ("CUOTA",),
    BoeConcept.REGISTER_INSCRIPTION: ("INSCRIPCIÓN REGISTRAL", "REFERENCIA REGISTRAL"),
    BoeConcept.START_DATE: ("FECHA DE INICIO",),
    BoeConcept.TELEPHONE: ("TELÉFONO",),
    BoeConcept.VISITABLE: ("VISITABLE",),
}

_INDEX = build_label_index(_LABELS)

# One scraped table: concept -> raw cell text.
ConceptMap = Dict[BoeConcept, str]

__all__ = ["BoeConcept", "ConceptMap"]

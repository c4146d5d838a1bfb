"""Tests for label normalization and the closed taxonomies."""

import pytest

from boewatch.domain.models import (
    AuctionKind,
    AuctionState,
    BoeConcept,
    InvalidLabelError,
    LotAuctionKind,
    OtherCategory,
    PropertyCategory,
    Province,
    VehicleCategory,
    normalize,
)
from boewatch.domain.models.taxonomies import (
    _OTHER_TABLE,
    _PROPERTY_TABLE,
    _PROVINCE_TABLE,
    _VEHICLE_TABLE,
)

KNOWN_LABELS = [
    pytest.param(parser, member, label, id=f"{member.name}-{label}")
    for parser, table in (
        (PropertyCategory.from_string, _PROPERTY_TABLE),
        (VehicleCategory.from_string, _VEHICLE_TABLE),
        (OtherCategory.from_string, _OTHER_TABLE),
        (Province.from_string, _PROVINCE_TABLE),
    )
    for member, labels in table.items()
    for label in labels
]


def test_normalize_folds_case_spaces_and_accents():
    assert normalize("Situación posesoria") == "SITUACIONPOSESORIA"
    assert normalize("CÓDIGO POSTAL") == normalize("código postal") == "CODIGOPOSTAL"


class TestCategoryParsing:
    @pytest.mark.parametrize(
        "parser,label,expected",
        [
            (PropertyCategory.from_string, "Vivienda", PropertyCategory.APARTMENT),
            (PropertyCategory.from_string, "LOCAL COMERCIAL", PropertyCategory.BUSINESS_PREMISES),
            (PropertyCategory.from_string, "finca rustica", PropertyCategory.RUSTIC),
            (VehicleCategory.from_string, "TURISMO", VehicleCategory.CAR),
            (VehicleCategory.from_string, "vehículo industrial", VehicleCategory.INDUSTRIAL),
            (OtherCategory.from_string, "MAQUINARIA", OtherCategory.MACHINERY),
            (OtherCategory.from_string, "Mercancías", OtherCategory.MERCHANDISE),
            (Province.from_string, "La Rioja", Province.LA_RIOJA),
            (Province.from_string, "VALLADOLID", Province.VALLADOLID),
        ],
    )
    def test_case_and_accent_insensitive(self, parser, label, expected):
        assert parser(label) == expected
        assert parser(label.upper()) == parser(label.lower()) == expected

    @pytest.mark.parametrize("parser,member,label", KNOWN_LABELS)
    def test_every_known_label_ignores_case(self, parser, member, label):
        assert parser(label.upper()) == parser(label.lower()) == member

    @pytest.mark.parametrize(
        "parser,expected",
        [
            (PropertyCategory.from_string, PropertyCategory.APARTMENT),
            (VehicleCategory.from_string, VehicleCategory.CAR),
            (OtherCategory.from_string, OtherCategory.OTHER),
            (Province.from_string, Province.UNKNOWN),
        ],
    )
    def test_empty_label_uses_default(self, parser, expected):
        assert parser("") == expected

    @pytest.mark.parametrize(
        "parser",
        [
            PropertyCategory.from_string,
            VehicleCategory.from_string,
            OtherCategory.from_string,
            Province.from_string,
        ],
    )
    def test_unknown_label_is_an_error(self, parser):
        with pytest.raises(InvalidLabelError):
            parser("Castillo encantado")

    def test_display_names(self):
        assert PropertyCategory.GARAGE.display == "Garaje"
        assert Province.A_CORUNA.display == "A Coruña"


class TestConcepts:
    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Valor subasta", BoeConcept.AUCTION_VALUE),
            ("Valor Subasta", BoeConcept.AUCTION_VALUE),
            ("Importe del depósito", BoeConcept.DEPOSIT_AMOUNT),
            ("Fecha de conclusión", BoeConcept.END_DATE),
            ("Forma de adjudicación", BoeConcept.LOT_AUCTION_KIND),
            ("Correo electrónico", BoeConcept.EMAIL),
        ],
    )
    def test_from_label(self, label, expected):
        assert BoeConcept.from_label(label) == expected

    def test_unknown_label(self):
        with pytest.raises(InvalidLabelError, match="concept"):
            BoeConcept.from_label("Color favorito")


class TestAuctionEnums:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Celebrándose", AuctionState.ONGOING),
            ("CELEBRANDOSE", AuctionState.ONGOING),
            ("Próxima apertura", AuctionState.TO_BE_OPENED),
            ("Suspendida", AuctionState.SUSPENDED),
            ("Concluida en Portal de Subastas", AuctionState.FINISHED),
            ("Cancelada", AuctionState.CANCELLED),
            ("Aplazada", AuctionState.UNKNOWN),
            ("", AuctionState.UNKNOWN),
            (None, AuctionState.UNKNOWN),
        ],
    )
    def test_state_from_string(self, text, expected):
        assert AuctionState.from_string(text) == expected

    def test_terminal_states(self):
        assert AuctionState.FINISHED.is_terminal
        assert AuctionState.CANCELLED.is_terminal
        assert not AuctionState.SUSPENDED.is_terminal

    def test_kind_and_lot_kind(self):
        assert AuctionKind.from_string("NOTARIAL EN VENTA EXTRAJUDICIAL") == AuctionKind.NOTARY_EXTRA_JUDICIAL
        assert AuctionKind.from_string("JUDICIAL EN VÍA DE APREMIO") == AuctionKind.JUDICIAL_UNDER_PRESSURE
        assert LotAuctionKind.from_string("Separada para cada lote") == LotAuctionKind.SPLITTED
        assert LotAuctionKind.from_string("Conjunta para todos los lotes") == LotAuctionKind.JOINED
        assert LotAuctionKind.from_string(None) == LotAuctionKind.NOT_APPLICABLE
        assert not LotAuctionKind.NOT_APPLICABLE.has_lots

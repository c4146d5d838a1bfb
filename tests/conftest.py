"""Shared fixtures: canned BOE pages, an in-memory page source, sample records
and a fresh database."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Tuple, Union

import pytest

from boewatch.domain.models import (
    Auction,
    AuctionKind,
    AuctionState,
    BidInfo,
    LotAuctionKind,
    Management,
    Other,
    OtherCategory,
    Property,
    PropertyCategory,
    Province,
    Vehicle,
    VehicleCategory,
)
from boewatch.infrastructure.db import ensure_schema, get_connection
from boewatch.infrastructure.http import FatalFetchError

FIXTURES = Path(__file__).parent / "fixtures"

SINGLE_AUCTION_ID = "SUB-JA-2020-149474"
LOT_AUCTION_ID = "SUB-JA-2020-158475"


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


Route = Tuple[str, Union[str, Exception]]


class FakeFetcher:
    """Serve canned pages; the first route whose key occurs in the URL wins."""

    def __init__(self, routes: Iterable[Route]) -> None:
        self.routes = list(routes)
        self.requested: list[str] = []

    async def fetch_text_async(self, url: str) -> str:
        self.requested.append(url)
        for key, body in self.routes:
            if key in url:
                if isinstance(body, Exception):
                    raise body
                return body
        raise FatalFetchError(url, "HTTP 404", 404)


def _detail_page(auction_id: str, auction_page: str) -> str:
    navigation = load_fixture("auction_navigation.html").replace(SINGLE_AUCTION_ID, auction_id)
    return navigation + auction_page


@pytest.fixture
def single_asset_routes() -> list[Route]:
    """Pages of a non-lot auction with one property."""
    auction_page = load_fixture("auction_page.html").replace(
        "SUB-NE-2020-465937", SINGLE_AUCTION_ID
    )
    return [
        ("ver=2", load_fixture("management_page.html")),
        ("ver=3", load_fixture("asset_page.html")),
        (f"idSub={SINGLE_AUCTION_ID}", _detail_page(SINGLE_AUCTION_ID, auction_page)),
    ]


@pytest.fixture
def lot_auction_routes() -> list[Route]:
    """Pages of an auction adjudicated separately for each of its two lots."""
    auction_page = (
        load_fixture("auction_page.html")
        .replace("SUB-NE-2020-465937", LOT_AUCTION_ID)
        .replace("<td>Sin lotes</td>", "<td>2</td>")
        .replace(
            "</table>",
            "<tr><th>Forma de adjudicaci&#xF3;n</th><td>Separada para cada lote</td></tr>"
            "</table>",
        )
    )
    return [
        ("ver=3&idLote=1", load_fixture("lot_page_1.html")),
        ("ver=3&idLote=2", load_fixture("lot_page_2.html")),
        ("ver=3&idBus", load_fixture("lot_links.html")),
        ("ver=2", load_fixture("management_page.html")),
        (f"idSub={LOT_AUCTION_ID}", _detail_page(LOT_AUCTION_ID, auction_page)),
    ]


@pytest.fixture
def fixture_html():
    """Loader for the HTML files under ``tests/fixtures``."""
    return load_fixture


@pytest.fixture
def make_fetcher():
    return FakeFetcher


@pytest.fixture
def make_detail_page():
    """Detail page (navigation plus auction table) for any auction id."""

    def _make(auction_id: str) -> str:
        auction_page = load_fixture("auction_page.html").replace("SUB-NE-2020-465937", auction_id)
        return _detail_page(auction_id, auction_page)

    return _make


MANAGEMENT = Management(
    code="3003000230",
    description="UNIDAD SUBASTAS JUDICIALES MURCIA",
    address="AV DE LA JUSTICIA S/N",
    telephone="968833360",
    fax="-",
    email="subastas.murcia@justicia.es",
)


def _auction(auction_id: str, state: AuctionState = AuctionState.ONGOING, **overrides) -> Auction:
    values = dict(
        id=auction_id,
        state=state,
        kind=AuctionKind.JUDICIAL_UNDER_PRESSURE,
        claim_quantity=Decimal("81971.57"),
        lots=0,
        lot_kind=LotAuctionKind.NOT_APPLICABLE,
        management=MANAGEMENT,
        bidinfo=BidInfo(
            appraisal=Decimal("75127.00"),
            claim_quantity=Decimal("81971.57"),
            deposit=Decimal("3756.35"),
            value=Decimal("75127.00"),
        ),
        start_date=date(2020, 7, 14),
        end_date=date(2020, 8, 3),
        notice="BOE-B-2020-21722",
    )
    values.update(overrides)
    return Auction(**values)


def _property(auction_id: str, **overrides) -> Property:
    values = dict(
        auction_id=auction_id,
        category=PropertyCategory.APARTMENT,
        address="CALLE MAYOR 1",
        city="MURCIA",
        province=Province.MURCIA,
        postal_code="30001",
        description="VIVIENDA EN PLANTA SEGUNDA",
        catastro_reference="1234567XH6013S0001AB",
        owner_status="NA",
        primary_residence="No",
        register_inscription="NA",
        visitable="No",
        charges=Decimal("0.00"),
    )
    values.update(overrides)
    return Property(**values)


def _vehicle(auction_id: str, **overrides) -> Vehicle:
    values = dict(
        auction_id=auction_id,
        category=VehicleCategory.CAR,
        brand="SEAT",
        model="IBIZA",
        license_plate="1234ABC",
        frame_number="VSSZZZ6JZ9R000001",
        licensed_date=date(2009, 3, 12),
        localization="DEPOSITO MUNICIPAL",
        description="TURISMO SEAT IBIZA",
        visitable="Sí",
        charges=Decimal("0.00"),
    )
    values.update(overrides)
    return Vehicle(**values)


def _other(auction_id: str, **overrides) -> Other:
    values = dict(
        auction_id=auction_id,
        category=OtherCategory.MACHINERY,
        description="TORNO INDUSTRIAL",
        judicial_title="NA",
        additional_information="NA",
        visitable="No",
        charges=Decimal("0.00"),
    )
    values.update(overrides)
    return Other(**values)


@pytest.fixture
def make_auction():
    return _auction


@pytest.fixture
def make_property():
    return _property


@pytest.fixture
def make_vehicle():
    return _vehicle


@pytest.fixture
def make_other():
    return _other


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "boewatch.db"


@pytest.fixture
def conn(db_path):
    """SQLite connection on a fresh database with the full schema."""
    with get_connection(db_path) as connection:
        ensure_schema(connection)
        yield connection

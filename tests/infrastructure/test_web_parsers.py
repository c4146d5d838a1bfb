"""Parser tests backed by HTML captured from the BOE auction portal."""

import pytest

from boewatch.domain.models import AuctionState, BoeConcept
from boewatch.infrastructure.web.endpoints import (
    ALL_AUCTIONS_URL,
    ONGOING_AUCTIONS_URL,
    absolute_url,
    one_auction_url,
)
from boewatch.infrastructure.web.parsers import (
    ParseError,
    extract_auction_id,
    extract_concept_map,
    extract_lot_id,
    parse_asset_page,
    parse_extra_pages,
    parse_lot_links,
    parse_lot_page,
    parse_main_auction_links,
    parse_main_auction_page,
    parse_management_page,
    parse_result_page,
    total_results,
)


class TestLinks:
    def test_result_page(self, fixture_html):
        results = parse_result_page(fixture_html("listing_page.html"))

        assert [extract_auction_id(link) for link, _ in results] == [
            "SUB-JA-2020-146153",
            "SUB-JA-2020-149625",
            "SUB-AT-2020-20R4186001070",
        ]
        assert all(state == AuctionState.ONGOING for _, state in results)
        assert results[0][0].startswith(
            "https://subastas.boe.es/./detalleSubasta.php?idSub=SUB-JA-2020-146153&idBus="
        )

    def test_result_without_state_is_unknown(self):
        page = (
            '<ul><li class="resultado-busqueda"><p>Sin estado</p>'
            '<a class="resultado-busqueda-link-otro" href="./detalleSubasta.php?idSub=SUB-1">x</a>'
            "</li></ul>"
        )
        assert parse_result_page(page) == [
            ("https://subastas.boe.es/./detalleSubasta.php?idSub=SUB-1", AuctionState.UNKNOWN)
        ]

    def test_extra_pages(self, fixture_html):
        page = fixture_html("listing_pagination.html")
        assert total_results(page) == 1572

        urls = parse_extra_pages(page)
        assert len(urls) == 3
        assert [url.rsplit("-", 2)[1:] for url in urls] == [
            ["500", "500"],
            ["1000", "500"],
            ["1500", "500"],
        ]
        assert all(
            url.startswith("https://subastas.boe.es/subastas_ava.php?accion=Mas&id_busqueda=")
            for url in urls
        )

    def test_single_page_has_no_extra_pages(self):
        page = '<div class="paginar"><p>Resultados 1 a 42 de 42</p></div>'
        assert parse_extra_pages(page) == []

    def test_missing_pagination(self, fixture_html):
        with pytest.raises(ParseError):
            total_results(fixture_html("listing_page.html"))

    def test_main_auction_links(self, fixture_html):
        management, assets = parse_main_auction_links(fixture_html("auction_navigation.html"))
        assert management.startswith(
            "https://subastas.boe.es/./detalleSubasta.php?idSub=SUB-JA-2020-149474&ver=2&"
        )
        assert assets.startswith(
            "https://subastas.boe.es/./detalleSubasta.php?idSub=SUB-JA-2020-149474&ver=3&"
        )

    def test_lot_links(self, fixture_html):
        links = parse_lot_links(fixture_html("lot_links.html"))
        assert [extract_lot_id(link) for link in links] == ["1", "2"]
        assert all(extract_auction_id(link) == "SUB-JA-2020-158475" for link in links)

    @pytest.mark.parametrize(
        "link",
        ["https://subastas.boe.es/detalleSubasta.php?ver=1", "./detalleSubasta.php?idSub=&ver=1"],
    )
    def test_auction_id_missing(self, link):
        with pytest.raises(ParseError):
            extract_auction_id(link)

    def test_urls(self):
        assert one_auction_url("SUB-1") == "https://subastas.boe.es/detalleSubasta.php?idSub=SUB-1"
        assert absolute_url("./x.php") == "https://subastas.boe.es/./x.php"
        assert "dato%5B2%5D=EJ" in ONGOING_AUCTIONS_URL
        assert "dato%5B2%5D=&" in ALL_AUCTIONS_URL
        assert ONGOING_AUCTIONS_URL.endswith("accion=Buscar")


class TestTables:
    def test_main_auction_page(self, fixture_html):
        data = parse_main_auction_page(fixture_html("auction_page.html"))

        assert data[BoeConcept.IDENTIFIER] == "SUB-NE-2020-465937"
        assert data[BoeConcept.AUCTION_KIND] == "NOTARIAL EN VENTA EXTRAJUDICIAL"
        assert data[BoeConcept.END_DATE] == (
            "03-08-2020 18:00:00 CET  (ISO: 2020-08-03T18:00:00+02:00)"
        )
        assert data[BoeConcept.CLAIM_QUANTITY] == "81.971,57 €"
        assert data[BoeConcept.MINIMUM_BID] == "Sin puja mínima"
        assert BoeConcept.LOT_AUCTION_KIND not in data
        assert len(data) == 12

    def test_management_page(self, fixture_html):
        data = parse_management_page(fixture_html("management_page.html"))
        assert data == {
            BoeConcept.CODE: "3003000230",
            BoeConcept.DESCRIPTION: "UNIDAD SUBASTAS JUDICIALES MURCIA (Ministerio de Justicia)",
            BoeConcept.ADDRESS: "AV DE LA JUSTICIA S/N S/N   ; 30011 MURCIA",
            BoeConcept.TELEPHONE: "968833360",
            BoeConcept.FAX: "-",
            BoeConcept.EMAIL: "subastas.murcia@justicia.es",
        }

    def test_asset_page(self, fixture_html):
        data = parse_asset_page(fixture_html("asset_page.html"))
        assert data[BoeConcept.HEADER] == "BIEN 1 - INMUEBLE (VIVIENDA)"
        assert data[BoeConcept.CATASTRO_REFERENCE] == "4110202UM5141A0003HH"
        assert data[BoeConcept.POSTAL_CODE] == "47014"
        assert data[BoeConcept.PRIMARY_RESIDENCE] == "Sí"

    def test_lot_page_merges_lot_terms_and_asset(self, fixture_html):
        data = parse_lot_page(fixture_html("lot_page_2.html"), "2")
        assert data[BoeConcept.HEADER] == "BIEN 1 - INMUEBLE (GARAJE)"
        assert data[BoeConcept.AUCTION_VALUE] == "15.100,00 €"
        assert data[BoeConcept.BID_STEP] == "302,00 €"
        assert data[BoeConcept.PROVINCE] == "La Rioja"

    def test_lot_page_wrong_lot(self, fixture_html):
        with pytest.raises(ParseError):
            parse_lot_page(fixture_html("lot_page_2.html"), "1")

    def test_missing_block(self, fixture_html):
        with pytest.raises(ParseError):
            parse_management_page(fixture_html("auction_page.html"))

    def test_row_without_value_cell(self):
        page = '<div id="idBloqueDatos2"><table><tr><th>Fax</th></tr></table></div>'
        with pytest.raises(ParseError):
            parse_management_page(page)

    def test_unknown_label_is_parse_error(self, caplog):
        page = '<div id="blk"><table><tr><th>Color</th><td>rojo</td></tr></table></div>'
        with pytest.raises(ParseError, match="concept"):
            extract_concept_map(page, "div#blk")
        assert "parsing-error in div#blk" in caplog.text

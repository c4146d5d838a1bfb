"""URLs of the BOE auction portal."""

from __future__ import annotations

from urllib.parse import urlencode

BASE_BOE_URL = "https://subastas.boe.es/"
ONE_AUCTION_PATH = "detalleSubasta.php?idSub="

# Results per listing page; also embedded in the pagination links.
RESULTS_PER_PAGE = 500

# Value of the SUBASTA.ESTADO filter selecting auctions being held.
ONGOING_STATE_CODE = "EJ"

_SEARCH_FIELDS = (
    "SUBASTA.ORIGEN",
    "SUBASTA.AUTORIDAD",
    "SUBASTA.ESTADO",
    "BIEN.TIPO",
    None,
    "BIEN.DIRECCION",
    "BIEN.CODPOSTAL",
    "BIEN.LOCALIDAD",
    "BIEN.COD_PROVINCIA",
    "SUBASTA.POSTURA_MINIMA_MINIMA_LOTES",
    "SUBASTA.NUM_CUENTA_EXPEDIENTE_1",
    "SUBASTA.NUM_CUENTA_EXPEDIENTE_2",
    "SUBASTA.NUM_CUENTA_EXPEDIENTE_3",
    "SUBASTA.NUM_CUENTA_EXPEDIENTE_4",
    "SUBASTA.NUM_CUENTA_EXPEDIENTE_5",
    "SUBASTA.ID_SUBASTA_BUSCAR",
)
_DATE_RANGE_FIELDS = ("SUBASTA.FECHA_FIN_YMD", "SUBASTA.FECHA_INICIO_YMD")


def listing_url(state_code: str = "", end_date_order: str = "asc") -> str:
    """Build the advanced-search URL returning the first listing page.

    ``state_code`` filters by auction state (empty for every state).
    """
    params: list[tuple[str, str]] = []
    for index, name in enumerate(_SEARCH_FIELDS):
        if name is not None:
            params.append((f"campo[{index}]", name))
        value = state_code if name == "SUBASTA.ESTADO" else ""
        params.append((f"dato[{index}]", value))
    for index, name in enumerate(_DATE_RANGE_FIELDS, start=len(_SEARCH_FIELDS)):
        params.append((f"campo[{index}]", name))
        params.append((f"dato[{index}][0]", ""))
        params.append((f"dato[{index}][1]", ""))
    params.append(("page_hits", str(RESULTS_PER_PAGE)))
    sort = (
        ("SUBASTA.FECHA_FIN_YMD", end_date_order),
        ("SUBASTA.FECHA_FIN_YMD", "asc"),
        ("SUBASTA.HORA_FIN", "asc"),
    )
    for index, (name, order) in enumerate(sort):
        params.append((f"sort_field[{index}]", name))
        params.append((f"sort_order[{index}]", order))
    params.append(("accion", "Buscar"))
    return f"{BASE_BOE_URL}subastas_ava.php?{urlencode(params)}"


ONGOING_AUCTIONS_URL = listing_url(ONGOING_STATE_CODE, end_date_order="desc")
ALL_AUCTIONS_URL = listing_url()


def one_auction_url(auction_id: str) -> str:
    """Detail page URL of a single auction."""
    return f"{BASE_BOE_URL}{ONE_AUCTION_PATH}{auction_id}"


def absolute_url(href: str) -> str:
    """Resolve a portal-relative link the way the portal's own pages do."""
    if href.startswith(("http://", "https://")):
        return href
    return BASE_BOE_URL + href


__all__ = [
    "ALL_AUCTIONS_URL",
    "BASE_BOE_URL",
    "ONGOING_AUCTIONS_URL",
    "RESULTS_PER_PAGE",
    "absolute_url",
    "listing_url",
    "one_auction_url",
]

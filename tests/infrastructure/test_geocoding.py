import pytest
import requests

from boewatch.domain.models import Coordinates
from boewatch.infrastructure.geocoding import NominatimResolver


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"HTTP {self.status}")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.queries = []
        self.headers = {}

    def get(self, url, params=None, timeout=None):
        self.queries.append(params)
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        pass


def _resolver(*responses):
    session = FakeSession(*responses)
    return NominatimResolver(min_interval_seconds=0, session=session), session


def test_street_lookup_returns_coordinates():
    resolver, session = _resolver(
        FakeResponse([{"lon": "-1.1307", "lat": "37.9922", "display_name": "Murcia"}])
    )
    point = resolver.resolve("CALLE MAYOR 1", "MURCIA", "Murcia", "Spain", "30001")

    assert point == Coordinates(longitude=-1.1307, latitude=37.9922)
    assert len(session.queries) == 1
    query = session.queries[0]
    assert query["street"] == "CALLE MAYOR 1"
    assert query["postalcode"] == "30001"
    assert query["format"] == "jsonv2"


def test_falls_back_to_city_lookup():
    resolver, session = _resolver(
        FakeResponse([]),
        FakeResponse([{"lon": "-2.44", "lat": "42.46"}]),
    )
    result = resolver.geocode("CALLE SIN NOMBRE", "LOGROÑO", "La Rioja", "Spain", "26007")

    assert result is not None
    assert result.source == "city"
    assert "street" not in session.queries[1]
    assert session.queries[1]["city"] == "LOGROÑO"


def test_placeholder_address_skips_street_lookup():
    resolver, session = _resolver(FakeResponse([{"lon": "1", "lat": "2"}]))
    result = resolver.geocode("NA", "SORIA", "", "Spain", "NA")

    assert result.source == "city"
    assert session.queries[0] == {
        "city": "SORIA",
        "country": "Spain",
        "countrycodes": "es",
        "format": "jsonv2",
    }


@pytest.mark.parametrize(
    "outcome",
    [
        FakeResponse([{}]),
        FakeResponse([{"lon": "east", "lat": "north"}]),
        FakeResponse(ValueError("not json")),
        FakeResponse([], status=503),
        requests.ConnectionError("unreachable"),
    ],
)
def test_unusable_answers_give_none(outcome):
    resolver, _ = _resolver(outcome)
    assert resolver.resolve("", "CUENCA", "Cuenca") is None

from __future__ import annotations

import asyncio

import httpx
import pytest

from core.domain.models import (
    DATA_NOT_LOADED,
    NEAREST_QUALIFIER,
    OUTSIDE_AREA,
    GeocodeCandidate,
    SearchStatus,
    ZoneCatalog,
)
from core.errors import GeocoderError
from core.services.search_pipeline import SearchContext, search_address

from conftest import square, zone


class StubGeocoder:
    def __init__(self, candidates=None, error: Exception | None = None) -> None:
        self.candidates = candidates or []
        self.error = error
        self.queries: list[str] = []

    async def geocode(self, query: str) -> list[GeocodeCandidate]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.candidates)


def _candidate(lon: float, lat: float, name: str = "Resultado") -> GeocodeCandidate:
    return GeocodeCandidate(display_name=name, lon=lon, lat=lat)


@pytest.fixture
def zones(palermo, belgrano) -> ZoneCatalog:
    return ZoneCatalog(
        operational_zones=(palermo, belgrano),
        subregions=(
            zone("Palermo", square(-58.45, -34.58, 0.02)),
            zone("Devoto", square(-58.51, -34.60, 0.02)),
        ),
    )


def _search(raw: str, geocoder: StubGeocoder, zones: ZoneCatalog | None = None, **kwargs):
    context = SearchContext(geocoder=geocoder, zones=zones or ZoneCatalog(), **kwargs)
    return asyncio.run(search_address(raw, context))


def test_full_search_resolves_zone_subregion_and_region(zones):
    geocoder = StubGeocoder([_candidate(-58.45, -34.58, "San Martin 1500"), _candidate(0, 0)])
    result = _search("av. San Martin 1500 (e/ Cabildo)", geocoder, zones)

    assert geocoder.queries == ["Avenida San Martin 1500, CABA"]
    assert result.status is SearchStatus.OK
    assert result.address == "Avenida San Martin 1500"
    assert result.display_address == "San Martin 1500"
    assert result.operational_zone == "Palermo"
    assert result.subregion == "Palermo"
    assert result.region == "Capital Sur"
    assert result.border_distance_m is None


def test_point_outside_everything_uses_nearest_operational_zone(zones):
    result = _search("Lejos 1", StubGeocoder([_candidate(-58.45, -34.70)]), zones)

    assert result.operational_zone == f"Palermo{NEAREST_QUALIFIER}"
    assert result.subregion == OUTSIDE_AREA
    assert result.region == OUTSIDE_AREA


def test_subregion_devoto_maps_to_capital_norte(zones):
    result = _search("Desaguadero 3000", StubGeocoder([_candidate(-58.51, -34.60)]), zones)
    assert result.subregion == "Devoto"
    assert result.region == "Capital Norte"


def test_border_distance_reported_near_the_edge(zones):
    result = _search("Borde 1", StubGeocoder([_candidate(-58.4401, -34.58)]), zones)
    assert result.operational_zone == "Palermo"
    assert result.border_distance_m == pytest.approx(9.2, abs=0.1)


def test_border_threshold_is_configurable(zones):
    result = _search("Borde 1", StubGeocoder([_candidate(-58.4401, -34.58)]), zones, border_threshold_m=5.0)
    assert result.border_distance_m is None


@pytest.mark.parametrize("raw", ["", "   ", "(sin calle)"])
def test_blank_input_short_circuits(raw):
    geocoder = StubGeocoder([_candidate(-58.45, -34.58)])
    result = _search(raw, geocoder)

    assert result.status is SearchStatus.EMPTY_INPUT
    assert geocoder.queries == []


def test_no_candidates_is_not_found(zones):
    result = _search("Calle Inexistente 1", StubGeocoder([]), zones)

    assert result.status is SearchStatus.NOT_FOUND
    assert result.address == "CALLE INEXISTENTE 1"
    assert result.operational_zone is None
    assert result.message == "No coordinates found for the address."


@pytest.mark.parametrize(
    "error",
    [httpx.ConnectError("connection refused"), httpx.ReadTimeout("timed out"), GeocoderError("HTTP 503")],
)
def test_transport_faults_become_connectivity_errors(zones, error, caplog):
    with caplog.at_level("ERROR", logger="geozonas.search"):
        result = _search("Cabildo 2000", StubGeocoder(error=error), zones)

    assert result.status is SearchStatus.CONNECTIVITY_ERROR
    assert result.operational_zone is None
    assert result.subregion is None
    assert result.region is None
    assert result.point is None
    assert "Geocoding failed" in caplog.text


def test_unloaded_zone_data_is_reported_per_collection(palermo):
    zones = ZoneCatalog(operational_zones=(palermo,), subregions=None)
    result = _search("Serrano 100", StubGeocoder([_candidate(-58.45, -34.58)]), zones)

    assert result.status is SearchStatus.OK
    assert result.operational_zone == "Palermo"
    assert result.subregion == DATA_NOT_LOADED
    assert result.region == "undefined region"


def test_concurrent_searches_share_read_only_context(zones):
    context = SearchContext(geocoder=StubGeocoder([_candidate(-58.45, -34.58)]), zones=zones)

    async def run_many():
        return await asyncio.gather(*(search_address(f"Cabildo {n}", context) for n in range(1, 6)))

    results = asyncio.run(run_many())
    assert {r.operational_zone for r in results} == {"Palermo"}
    assert [r.address for r in results] == [f"Cabildo {n}" for n in range(1, 6)]

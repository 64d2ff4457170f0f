import pytest
from fastapi.testclient import TestClient

from country_atlas.main import app


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Country Atlas API"


def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "ok"
    assert data["countries"] == 250


def test_list_all_countries(client):
    data = client.get("/countries").json()
    assert len(data) == 250
    assert data[0]["name"] == "India"
    assert data[0]["officialName"] == "Republic of India"
    assert data[0]["geo"]["areaKm2"] == 3287590


def test_list_with_filters(client):
    data = client.get("/countries", params={"currency": "eur", "landlocked": "true"}).json()
    assert data
    assert all(c["currency"]["code"] == "EUR" and c["geo"]["landlocked"] for c in data)

    oceania = client.get("/countries", params={"continent": "Oceania"}).json()
    assert len(oceania) == 27


def test_search(client):
    names = [c["name"] for c in client.get("/countries/search", params={"q": "united"}).json()]
    assert names[0] == "United Arab Emirates"
    assert "Tanzania" in names
    assert client.get("/countries/search").json() == []


def test_get_country_by_any_code(client):
    for code in ("in", "IND", "india"):
        resp = client.get(f"/countries/{code}")
        assert resp.status_code == 200
        assert resp.json()["iso"]["alpha2"] == "IN"


def test_get_country_selected_fields(client):
    data = client.get("/countries/in", params={"fields": "name,currency"}).json()
    assert data == {
        "name": "India",
        "currency": {"code": "INR", "name": "Indian rupee", "symbol": "₹"},
    }


def test_unknown_country_is_404(client):
    resp = client.get("/countries/zz")
    assert resp.status_code == 404
    assert resp.json() == {
        "detail": "Country not found with name: zz",
        "code": "zz",
        "searchType": "name",
    }


def test_continent_route(client):
    assert len(client.get("/countries/continent/europe").json()) == 53
    resp = client.get("/countries/continent/atlantis")
    assert resp.status_code == 400
    assert resp.json()["field"] == "continent"


def test_currency_language_and_calling_code_routes(client):
    assert len(client.get("/countries/currency/EUR").json()) == 37
    assert client.get("/countries/language/spanish").json()[0]["name"] == "Spain"
    shared = client.get("/countries/calling-code/1").json()
    assert [c["iso"]["alpha2"] for c in shared] == ["US", "CA", "DO", "PR"]


def test_borders(client):
    names = [c["name"] for c in client.get("/countries/in/borders").json()]
    assert "Pakistan" in names and "China" in names
    assert client.get("/countries/jp/borders").json() == []
    assert client.get("/countries/zz/borders").status_code == 404


def test_nearest(client):
    data = client.get("/countries/fr/nearest", params={"limit": 3}).json()
    assert len(data) == 3
    assert all(item["alpha2"] != "FR" for item in data)
    distances = [item["distanceKm"] for item in data]
    assert distances == sorted(distances)
    assert client.get("/countries/fr/nearest", params={"limit": 0}).status_code == 422


def test_flag_svg(client):
    resp = client.get("/countries/in/flag.svg", params={"width": 32, "height": 24})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("image/svg+xml")
    assert 'width="32" height="24"' in resp.text

    scaled = client.get("/countries/in/flag.svg", params={"width": 64})
    assert 'width="64" height="48"' in scaled.text

    missing = client.get("/countries/us/flag.svg")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "No flag artwork for US"


def test_validate_phone(client):
    resp = client.post("/phone/validate", json={"phone": "+91 98765 43210"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["isValid"] is True
    assert data["callingCode"] == "+91"
    assert data["nationalNumber"] == "9876543210"
    assert data["country"]["name"] == "India"


def test_validate_phone_with_country(client):
    data = client.post("/phone/validate", json={"phone": "12", "country": "IN"}).json()
    assert data["isValid"] is False
    assert data["error"] == "Phone number too short"

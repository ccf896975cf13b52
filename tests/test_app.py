import pytest

from paint_registry.app import create_app
from paint_registry.ledger import InMemoryLedger
from paint_registry.metadata import get_token_uri_for_color
from paint_registry.registry import ColorRegistry

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20


@pytest.fixture
def client():
    app = create_app(registry=ColorRegistry(InMemoryLedger()))
    app.config["TESTING"] = True
    return app.test_client()


def _mint(client, color, owner=ALICE):
    return client.post("/mint", json={"color": color, "owner": owner})


def test_index(client):
    data = client.get("/").get_json()
    assert data == {"name": "ThePaintProject", "symbol": "PAINT", "totalSupply": 0, "maxSupply": 1024}


def test_mint_and_lookup(client):
    resp = _mint(client, "#FFFFFF")
    assert resp.status_code == 201
    assert resp.get_json() == {"tokenId": 0, "color": "#FFFFFF", "owner": ALICE}

    _mint(client, "#150050")
    assert client.get("/colors").get_json() == ["#FFFFFF", "#150050"]
    assert client.get("/colors/1").get_json()["color"] == "#150050"
    assert client.get("/token-for-color", query_string={"color": "#150050"}).get_json()["tokenId"] == 1

    token = client.get("/tokens/1").get_json()
    assert token["owner"] == ALICE
    assert token["tokenURI"] == get_token_uri_for_color("#150050")


def test_mint_errors(client):
    assert _mint(client, "#FFF").status_code == 400
    assert client.post("/mint", json={"color": "#FFFFFF"}).status_code == 400
    assert client.post("/mint", data="nope").status_code == 400
    _mint(client, "#FFFFFF")
    resp = _mint(client, "#FFFFFF", BOB)
    assert resp.status_code == 409
    assert "already minted" in resp.get_json()["error"]
    assert client.get("/").get_json()["totalSupply"] == 1


def test_supply_cap_from_config(monkeypatch):
    monkeypatch.setenv("PAINT_MAX_SUPPLY", "2")
    client = create_app().test_client()
    assert _mint(client, "#000001").status_code == 201
    assert _mint(client, "#000002").status_code == 201
    resp = _mint(client, "#000003")
    assert resp.status_code == 409
    assert client.get("/").get_json()["maxSupply"] == 2


def test_not_found(client):
    assert client.get("/colors/0").status_code == 404
    assert client.get("/tokens/3").status_code == 404
    assert client.get("/token-for-color", query_string={"color": "#123456"}).status_code == 404
    assert client.get("/no-such-route").status_code == 404


def test_owner_colors_and_transfer(client):
    _mint(client, "#FFFFFF")
    _mint(client, "#000000")
    resp = client.post("/transfer", json={"from": ALICE, "to": BOB, "tokenId": 0})
    assert resp.status_code == 200
    assert client.get(f"/owners/{ALICE}/colors").get_json() == ["#FFFFFF", "#000000"]
    assert client.get(f"/owners/{ALICE}/colors?current=1").get_json() == ["#000000"]
    assert client.get(f"/owners/{BOB}/colors?current=1").get_json() == ["#FFFFFF"]

    resp = client.post("/transfer", json={"from": ALICE, "to": BOB, "tokenId": 0})
    assert resp.status_code == 403
    resp = client.post("/transfer", json={"from": ALICE, "to": BOB, "tokenId": "0"})
    assert resp.status_code == 400


def test_metadata_and_hsl(client):
    resp = client.get("/metadata", query_string={"color": "#150050"})
    assert resp.get_json()["tokenURI"] == get_token_uri_for_color("#150050")
    assert client.get("/metadata", query_string={"color": "150050"}).status_code == 400

    data = client.get("/hsl", query_string={"color": "#A05046"}).get_json()
    assert data == {"color": "#A05046", "rgb": [160, 80, 70], "hsl": [7, 39, 45]}


def test_collection_identity_from_env(monkeypatch):
    monkeypatch.setenv("PAINT_COLLECTION_NAME", "Swatches")
    monkeypatch.setenv("PAINT_COLLECTION_SYMBOL", "SWT")
    data = create_app().test_client().get("/").get_json()
    assert data["name"] == "Swatches"
    assert data["symbol"] == "SWT"

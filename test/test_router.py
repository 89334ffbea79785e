import pytest
from fastapi.testclient import TestClient

from conftest import ALICE, ANC_1, NOTES
from dataitem import DataItemApi, create_app
from dataitem.core.logging import LEVELS, log


@pytest.fixture(autouse=True)
def restore_log_level(monkeypatch):
    monkeypatch.setattr(log, "level", log.level)


@pytest.fixture
def client(config, db_client):
    return TestClient(create_app(config, db_client))


def get(client, headers=None, **params):
    return client.get("/dataItems", params=params, headers=headers or {})


def test_search_indicators(client):
    response = get(client, filter=["dimensionItemType:in:[INDICATOR]"], order=["name:asc"])

    assert response.status_code == 200
    body = response.json()
    assert body["pager"] == {"page": 1, "pageCount": 1, "total": 2, "pageSize": 50}
    assert [item["name"] for item in body["dataItems"]] == ["ANC 1 Coverage", "ANC 2 Coverage"]
    assert body["dataItems"][0]["dimensionItemType"] == "INDICATOR"
    assert "programId" not in body["dataItems"][0]


def test_without_paging(client):
    body = get(client, paging="false").json()

    assert "pager" not in body
    assert len(body["dataItems"]) == 12


def test_page_size(client):
    body = get(client, page=2, pageSize=5).json()

    assert body["pager"]["pageCount"] == 3
    assert len(body["dataItems"]) == 5


def test_locale(client):
    body = get(
        client,
        filter=["dimensionItemType:eq:DATA_ELEMENT", "displayName:ilike:visite"],
        locale="fr",
    ).json()

    assert [(item["id"], item["displayName"]) for item in body["dataItems"]] == [
        (ANC_1, "Premiere visite CPN")
    ]


def test_user_header(client):
    params = dict(filter=["dimensionItemType:eq:DATA_ELEMENT", "valueType:eq:TEXT"])

    assert get(client, **params).json()["dataItems"] == []

    body = get(client, headers={"X-User-Id": ALICE}, **params).json()
    assert [item["id"] for item in body["dataItems"]] == [NOTES]
    assert body["dataItems"][0]["simplifiedValueType"] == "TEXT"

    body = get(client, userId=ALICE, **params).json()
    assert [item["id"] for item in body["dataItems"]] == [NOTES]


@pytest.mark.parametrize(
    "params, error_code",
    [
        (dict(filter=["name"]), "E2014"),
        (dict(order=["name"]), "E2015"),
        (dict(filter=["code:eq:ANC"]), "E2034"),
        (dict(filter=["name:like:anc"]), "E2035"),
        (dict(filter=["name:ilike:anc"], order=["displayName:asc"]), "E2036"),
        (dict(order=["name:up"]), "E2037"),
        (dict(filter=["name:ilike:a"]), "E2038"),
        (dict(filter=["valueType:eq:BOGUS"]), "E2039"),
    ],
)
def test_rejected_requests(client, params, error_code):
    response = get(client, **params)

    assert response.status_code == 409
    body = response.json()
    assert body["errorCode"] == error_code
    assert body["httpStatus"] == "Conflict"
    assert body["status"] == "ERROR"


def test_page_must_be_positive(client):
    assert get(client, page=0).status_code == 422


def test_print_welcome(config, db_client):
    log.set_level("INFO")
    DataItemApi(config, db_client).print_welcome()


def test_log_level_is_set_by_create_app_only(config, db_client):
    log.set_level("DEBUG")

    DataItemApi(config.model_copy(update={"log_level": "ERROR"}), db_client)
    assert log.level == LEVELS["DEBUG"]

    create_app(config, db_client)
    assert log.level == LEVELS["WARNING"]


def broken_connection():
    raise RuntimeError("database is down")


@pytest.mark.parametrize("debug_mode, detail", [(True, "database is down"), (False, None)])
def test_unexpected_errors_become_500(config, db_client, debug_mode, detail):
    app = create_app(config.model_copy(update={"debug_mode": debug_mode}), db_client)
    app.dependency_overrides[db_client.get_db] = broken_connection

    response = TestClient(app, raise_server_exceptions=False).get("/dataItems")

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "ERROR"
    assert body["httpStatusCode"] == 500
    assert body["detail"] == detail

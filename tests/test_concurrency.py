from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from conftest import auth_headers, login, register


CALLERS = 25


def test_parallel_increments_are_not_lost(file_app):
    with file_app.app_context():
        file_app.counter_ledger.add_counter("x")

    def click(_):
        with file_app.app_context():
            return file_app.counter_ledger.increment("x")["count"]

    with ThreadPoolExecutor(max_workers=8) as pool:
        counts = list(pool.map(click, range(CALLERS)))

    # Each caller saw a distinct intermediate value.
    assert sorted(counts) == list(range(1, CALLERS + 1))
    with file_app.app_context():
        assert file_app.counter_ledger.list_counters()["x"]["count"] == CALLERS


def test_parallel_http_increments_are_not_lost(file_app):
    client = file_app.test_client()
    register(client, "bilal", "pw1")
    token = login(client, "bilal", "pw1").get_json()["token"]
    client.post("/api/add", json={"name": "x"}, headers=auth_headers(token))

    def click(_):
        resp = file_app.test_client().post("/api/increment/x", headers=auth_headers(token))
        return resp.status_code

    with ThreadPoolExecutor(max_workers=8) as pool:
        statuses = list(pool.map(click, range(CALLERS)))

    assert statuses == [200] * CALLERS
    assert client.get("/api/names").get_json()["x"]["count"] == CALLERS


def test_parallel_logins_each_get_a_session(file_app):
    client = file_app.test_client()
    register(client, "bilal", "pw1")

    def sign_in(_):
        return file_app.test_client().post(
            "/api/login", json={"username": "bilal", "password": "pw1"}
        ).get_json()["token"]

    with ThreadPoolExecutor(max_workers=4) as pool:
        tokens = list(pool.map(sign_in, range(10)))

    assert len(set(tokens)) == 10
    with file_app.app_context():
        assert all(file_app.credential_store.resolve_session(t) == "bilal" for t in tokens)


def test_parallel_duplicate_adds_create_one_counter(file_app):
    client = file_app.test_client()
    register(client, "bilal", "pw1")
    token = login(client, "bilal", "pw1").get_json()["token"]

    def add(_):
        return file_app.test_client().post(
            "/api/add", json={"name": "x"}, headers=auth_headers(token)
        ).status_code

    with ThreadPoolExecutor(max_workers=8) as pool:
        statuses = list(pool.map(add, range(10)))

    assert sorted(statuses) == [201] + [400] * 9
    assert client.get("/api/names").get_json() == {"x": {"count": 0, "lastClickedAt": None}}

from portprobe.config import ConfigStore
from portprobe.http_api import create_app


def _client(values=None):
    app = create_app(ConfigStore(values=values))
    app.config["TESTING"] = True
    return app.test_client()


def test_config_lookup_returns_key_and_value():
    resp = _client({"mode": "fast"}).get("/config?key=mode")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "mode: fast"
    assert resp.mimetype == "text/plain"


def test_missing_key_has_empty_value():
    resp = _client().get("/config?key=absent")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "absent: "


def test_store_updates_visible_to_app():
    store = ConfigStore()
    client = create_app(store).test_client()
    store.set("rate", "slow")
    assert client.get("/config", query_string={"key": "rate"}).get_data(as_text=True) == "rate: slow"


def test_post_not_allowed():
    assert _client().post("/config?key=mode").status_code == 405

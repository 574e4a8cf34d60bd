from movie_service.core.config import DEFAULT_ALLOWED_ORIGINS, get_settings
from movie_service.core.cors import OriginGate, get_origin_gate


def test_gate_allows_listed_and_missing_origins():
    gate = OriginGate(["http://movies.com"])
    assert gate.allows("http://movies.com")
    assert gate.allows(None)
    assert gate.allows("")
    assert not gate.allows("http://evil.example")


def test_gate_headers():
    gate = OriginGate(["http://movies.com"])
    assert gate.headers_for("http://movies.com") == {"Access-Control-Allow-Origin": "http://movies.com"}
    assert gate.headers_for(None) == {"Access-Control-Allow-Origin": "*"}
    assert gate.headers_for("http://evil.example") == {}
    assert gate.headers_for("http://evil.example", preflight=True) == {}


def test_gate_preflight_headers_list_methods():
    gate = OriginGate(["http://movies.com"])
    headers = gate.headers_for("http://movies.com", preflight=True)
    assert headers["Access-Control-Allow-Methods"] == "GET, POST, PATCH, DELETE"


def test_gate_allow_list_is_immutable():
    origins = ["http://movies.com"]
    gate = OriginGate(origins)
    origins.append("http://evil.example")
    assert not gate.allows("http://evil.example")
    assert isinstance(gate.allowed_origins, frozenset)


def test_default_gate_uses_default_origins():
    assert get_origin_gate().allowed_origins == frozenset(DEFAULT_ALLOWED_ORIGINS)


def test_allowed_origins_from_env(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", '["https://films.example"]')
    get_settings.cache_clear()
    get_origin_gate.cache_clear()
    assert get_origin_gate().allows("https://films.example")
    assert not get_origin_gate().allows("http://movies.com")


def test_port_defaults_and_env(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    get_settings.cache_clear()
    assert get_settings().port == 1234
    monkeypatch.setenv("PORT", "8000")
    get_settings.cache_clear()
    assert get_settings().port == 8000

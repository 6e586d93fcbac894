from profrate.config.settings import AppSettings


def test_defaults(monkeypatch):
    for name in [
        "STORE_BACKEND",
        "MONGO_URL",
        "MONGO_DATABASE",
        "MONGO_PROFESSORS_COLLECTION",
        "MONGO_USERS_COLLECTION",
        "TOP_PROFESSORS_LIMIT",
        "TELEMETRY_ENABLED",
        "LOG_JSON",
    ]:
        monkeypatch.delenv(name, raising=False)
    s = AppSettings()

    assert s.store_backend == "mongo"
    assert s.mongo_url == "mongodb://localhost:27017"
    assert s.mongo_database == "profrate"
    assert s.mongo_professors_collection == "professors"
    assert s.mongo_users_collection == "users"
    assert s.top_professors_limit == 3
    assert s.telemetry_enabled is True
    assert s.log_json is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "MEMORY")
    monkeypatch.setenv("MONGO_TIMEOUT_MS", "250")
    monkeypatch.setenv("TELEMETRY_ENABLED", "false")
    monkeypatch.setenv("TOP_PROFESSORS_LIMIT", "10")
    monkeypatch.setenv("LOG_JSON", "TRUE")
    s = AppSettings()

    assert s.store_backend == "memory"
    assert s.mongo_timeout_ms == 250
    assert s.telemetry_enabled is False
    assert s.top_professors_limit == 10
    assert s.log_json is True

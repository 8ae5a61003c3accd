from projectflow_engine.config import Settings


def test_defaults(monkeypatch):
    for name in ("PROJECTFLOW_EXPIRY_DAYS", "PROJECTFLOW_BUFFER_DAYS", "PROJECTFLOW_SENDER"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.expiry_threshold_days == 15
    assert settings.timeline_buffer_days == 5
    assert settings.sender_address == "system@projectflow.ai"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PROJECTFLOW_EXPIRY_DAYS", "7")
    monkeypatch.setenv("PROJECTFLOW_SENDER", "alerts@example.com")
    monkeypatch.setenv("PROJECTFLOW_SEND_LATENCY", "not-a-number")
    settings = Settings()
    assert settings.expiry_threshold_days == 7
    assert settings.sender_address == "alerts@example.com"
    assert settings.send_latency_seconds == 0.0


def test_explicit_values_win_over_environment(monkeypatch):
    monkeypatch.setenv("PROJECTFLOW_EXPIRY_DAYS", "7")
    monkeypatch.setenv("PROJECTFLOW_FALLBACK_MANAGER", "ops@example.com")
    settings = Settings(expiry_threshold_days=20)
    assert settings.expiry_threshold_days == 20
    assert settings.fallback_manager_address == "ops@example.com"

import time

from agecache.aging import AgingRecord, AgingRegistry


def test_registry_expires_after_lifetime(monkeypatch):
    current = 0.0

    def fake_time():
        return current

    monkeypatch.setattr(time, "monotonic", fake_time)
    registry = AgingRegistry()
    registry.record("key", 1000)

    assert registry.is_expired("key") is False

    current = 1.0
    assert registry.is_expired("key") is False

    current = 1.001
    assert registry.is_expired("key") is True


def test_registry_untracked_key_is_not_expired():
    registry = AgingRegistry()
    assert registry.is_expired("missing") is False
    assert registry.get("missing") is None


def test_registry_record_overwrites(monkeypatch):
    current = 0.0

    def fake_time():
        return current

    monkeypatch.setattr(time, "monotonic", fake_time)
    registry = AgingRegistry()
    registry.record("key", 100)

    current = 0.05
    registry.record("key", 5000)

    assert registry.get("key") == AgingRecord(inserted_at=50.0, lifetime=5000)
    current = 1.0
    assert registry.is_expired("key") is False
    assert len(registry) == 1


def test_registry_forget_and_clear():
    registry = AgingRegistry()
    registry.record("a", 10)
    registry.record("b", 10)

    registry.forget("a")
    registry.forget("a")
    assert "a" not in registry
    assert "b" in registry

    registry.clear()
    assert len(registry) == 0


def test_registry_expired_keys(monkeypatch):
    current = 0.0

    def fake_time():
        return current

    monkeypatch.setattr(time, "monotonic", fake_time)
    registry = AgingRegistry()
    registry.record("short", 100)
    registry.record("long", 10000)

    current = 0.5
    assert registry.expired_keys() == ["short"]


def test_registry_mutators_report_changes():
    registry = AgingRegistry()

    assert registry.record("a", 10) is True
    assert registry.record("a", 20) is False
    registry.record("b", 10)

    assert registry.forget("a") is True
    assert registry.forget("a") is False
    assert registry.clear() == 1
    assert registry.clear() == 0

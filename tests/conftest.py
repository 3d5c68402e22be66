import pytest

from eventunit import EventUnit, MemoryEventBus, NativeEventBus


@pytest.fixture(params=["memory", "native", "unit-memory", "unit-native"])
def bus(request):
    """Every backend flavour, which must all behave the same."""
    if request.param == "memory":
        return MemoryEventBus()
    if request.param == "native":
        return NativeEventBus()
    return EventUnit.create({"provider": request.param.split("-", 1)[1]})


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("EVENTUNIT_PROVIDER", raising=False)
    monkeypatch.delenv("EVENTUNIT_SETTINGS_DIR", raising=False)

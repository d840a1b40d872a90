import logging

import pytest

from debug import COMPONENTS, Debug


@pytest.fixture
def dbg():
    d = Debug()
    yield d
    d.toggle_global(False)


def test_components_start_disabled(dbg):
    assert set(dbg.status()) == set(COMPONENTS)
    assert not any(dbg.status().values())


def test_instances_share_toggles(dbg):
    dbg.enable("stepping")
    assert Debug().status()["stepping"] is True
    dbg.toggle("stepping")
    assert Debug().status()["stepping"] is False


def test_unknown_component(dbg):
    with pytest.raises(ValueError):
        dbg.enable("plugboard")


def test_log_respects_toggle(dbg, caplog):
    with caplog.at_level(logging.DEBUG, logger="ROTOR"):
        dbg.log("rotor", "hidden")
        dbg.enable("rotor")
        dbg.log("rotor", "shown")
    assert "shown" in caplog.text
    assert "hidden" not in caplog.text


def test_is_on_follows_switches(dbg):
    assert dbg.is_on("reflector") is False
    dbg.enable("reflector")
    assert dbg.is_on("reflector") is True
    assert dbg.is_on("nonsense") is False


def test_log_to_file(dbg, tmp_path):
    path = tmp_path / "rotor.log"
    handler = dbg.log_to_file(path)
    try:
        dbg.enable("stepping")
        dbg.log("stepping", "offsets [0, 0, 1]")
        dbg.log("rotor", "not switched on")
    finally:
        dbg.logger.removeHandler(handler)
        handler.close()
    text = path.read_text(encoding="utf-8")
    assert "[STEPPING] offsets [0, 0, 1]" in text
    assert "not switched on" not in text

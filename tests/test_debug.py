"""Tests for the component-switched debug logger."""

import logging

import pytest

from debug import Debug


@pytest.fixture(autouse=True)
def restore_components():
    saved = Debug._components.copy()
    yield
    Debug._components.update(saved)


class TestComponents:
    def test_all_off_by_default(self):
        assert not any(Debug().status().values())

    def test_status_is_a_copy(self):
        dbg = Debug()
        dbg.status()["rotor"] = True
        assert dbg.status()["rotor"] is False

    def test_switches_are_shared(self):
        Debug().enable("stepping")
        assert Debug().status()["stepping"] is True

    def test_unknown_component_enables_nothing(self):
        with pytest.raises(ValueError, match="No such component"):
            Debug().enable("rotor", "lamps")
        assert Debug().status()["rotor"] is False

    def test_repr(self):
        dbg = Debug()
        dbg.enable("config")
        assert repr(dbg) == "<Debug active=['config']>"


class TestLogging:
    def test_logs_only_enabled_components(self, caplog):
        caplog.set_level(logging.DEBUG, logger="ENIGMA")
        dbg = Debug()
        dbg.log("rotor", "hidden")
        dbg.enable("rotor")
        dbg.log("rotor", "shown")
        assert [r.getMessage() for r in caplog.records] == ["[ROTOR] shown"]

    def test_log_file(self, tmp_path, caplog):
        caplog.set_level(logging.DEBUG, logger="ENIGMA")
        path = tmp_path / "enigma.log"
        Debug.add_log_file(str(path))
        dbg = Debug()
        dbg.enable("config")
        dbg.log("config", "to file")
        root = logging.getLogger()
        for handler in list(root.handlers):
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == str(path):
                handler.close()
                root.removeHandler(handler)
        assert "[CONFIG] to file" in path.read_text(encoding="utf-8")

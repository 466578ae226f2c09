"""Tests for logging defaults and configure_logging."""

from __future__ import annotations

import json

import pytest
import structlog

from trisphere.log import configure_logging, install_library_defaults
from trisphere.planet import TilePlanet
from trisphere.sphere import icosahedron


@pytest.fixture
def fresh_logging():
    """Start from an unconfigured structlog."""
    structlog.reset_defaults()


class TestLibraryDefaults:

    def test_build_is_silent(self, fresh_logging, capsys):
        install_library_defaults()
        TilePlanet.build(icosahedron(), subdivision_level=2)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_warnings_are_silent(self, fresh_logging, capsys):
        install_library_defaults()
        planet = TilePlanet.build(icosahedron(), subdivision_level=0)
        assert planet.pick(99, (0.0, 0.0, 1.0)) is None
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_existing_configuration_kept(self, fresh_logging):
        structlog.configure(processors=[structlog.processors.JSONRenderer()])
        install_library_defaults()
        processors = structlog.get_config()["processors"]
        assert len(processors) == 1
        assert isinstance(processors[0], structlog.processors.JSONRenderer)


class TestConfigureLogging:

    def test_json_events_on_stderr(self, fresh_logging, capsys):
        configure_logging("INFO", json=True)
        TilePlanet.build(icosahedron(), subdivision_level=1)
        captured = capsys.readouterr()
        assert captured.out == ""
        events = [json.loads(line) for line in captured.err.splitlines() if line.strip()]
        names = [e["event"] for e in events]
        assert "tiles_generated" in names
        assert "planet_built" in names
        assert all(e["logger"].startswith("trisphere.") for e in events)

    def test_level_filters(self, fresh_logging, capsys):
        configure_logging("WARNING")
        TilePlanet.build(icosahedron(), subdivision_level=1)
        assert capsys.readouterr().err == ""

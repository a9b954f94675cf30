"""Shared fixtures for device access tests."""

import asyncio

import pytest

from device_access import BaseDevice, Notifier


class ThermostatView(Notifier):
    """Interface view mixing every property convention."""

    def __init__(self):
        self.mode = "heat"
        self._temperature = 20.5
        self._target = 21.0
        self._humidity = 40

    def getTemperature(self):
        return self._temperature

    async def getTargetAsync(self):
        await asyncio.sleep(0)
        return self._target

    async def setTargetAsync(self, value):
        await asyncio.sleep(0)
        self._target = value
        self.emit("target", value)

    def getHumidity(self):
        return self._humidity

    def setHumidity(self, value):
        self._humidity = value

    async def boost(self, degrees, minutes=30):
        await asyncio.sleep(0)
        self._target += degrees
        return {"target": self._target, "minutes": minutes}

    def reset(self):
        self._target = 21.0


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep settings files out of the real config directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.setenv("APPDATA", str(config_dir))
    return config_dir


@pytest.fixture
def thermostat_view():
    return ThermostatView()


@pytest.fixture
def thermostat(thermostat_view):
    """A device exposing its thermostat view through as_interface."""
    device = BaseDevice("thermo-1", "Hallway Thermostat", model="T100")
    device.add_interface("org.sample.Thermostat", thermostat_view)
    return device

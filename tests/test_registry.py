"""Tests for the type registry used by serialization."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import pytest

from goapkit.demo import PicnicGoal, PicnicState
from goapkit.errors import RegistryError
from goapkit.registry import TypeRegistry


@pytest.fixture
def temp_names():
    """Names registered by a test, removed afterwards."""
    names: list[tuple[str, str]] = []
    yield names
    for kind, name in names:
        TypeRegistry.unregister(kind, name)


def test_register_state(temp_names):
    @TypeRegistry.register_state("test_weather")
    @dataclass(frozen=True)
    class Weather:
        raining: bool = False

    temp_names.append(("state", "test_weather"))

    assert TypeRegistry.get("state", "test_weather") is Weather
    assert TypeRegistry.name_of("state", Weather()) == "test_weather"


def test_register_goal_enum(temp_names):
    @TypeRegistry.register_goal("test_mood")
    class Mood(enum.Enum):
        HAPPY = "happy"

    temp_names.append(("goal", "test_mood"))

    assert TypeRegistry.name_of("goal", Mood.HAPPY) == "test_mood"
    assert "test_mood" in TypeRegistry.all_types("goal")


def test_override_warns(temp_names, caplog):
    @TypeRegistry.register_action("test_dup")
    class First:
        pass

    temp_names.append(("action", "test_dup"))

    with caplog.at_level(logging.WARNING, logger="goapkit.registry"):

        @TypeRegistry.register_action("test_dup")
        class Second:
            pass

    assert "already registered" in caplog.text
    assert TypeRegistry.get("action", "test_dup") is Second


def test_demo_types_registered():
    assert TypeRegistry.get("state", "picnic_state") is PicnicState
    assert TypeRegistry.get("goal", "picnic_goal") is PicnicGoal


def test_unknown_name():
    with pytest.raises(RegistryError):
        TypeRegistry.get("action", "no_such_action")


def test_unregistered_type():
    with pytest.raises(RegistryError):
        TypeRegistry.name_of("state", object())


def test_unregister_missing_is_noop():
    TypeRegistry.unregister("goal", "never_registered")

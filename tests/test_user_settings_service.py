"""Tests for goals, theme and presets."""

import json

import pytest

from daily_journal.domain.errors import NotFound, ValidationError
from daily_journal.domain.goals import Goals, Preset
from daily_journal.services.presets import PresetService
from daily_journal.services.storage import JournalStorage
from daily_journal.services.user_settings import UserSettingsService
from tests.conftest import FailingKeyValueStore


def test_defaults_are_used_without_stored_goals(storage: JournalStorage) -> None:
    service = UserSettingsService(storage)

    assert service.get_goals() == Goals(calories=2000, protein=150, burn=0)
    assert service.get_theme() == "light"


def test_set_goal_persists(
    storage: JournalStorage, store: FailingKeyValueStore
) -> None:
    service = UserSettingsService(storage)

    service.set_goal("calories", "2200")
    service.set_goal("burn", 0)

    assert service.get_goals().calories == 2200
    assert json.loads(store.values["DAILY_CAL_GOAL"]) == 2200
    assert UserSettingsService(storage).get_goals().calories == 2200


@pytest.mark.parametrize(
    ("metric", "value"),
    [("calories", 0), ("protein", -1), ("burn", -5), ("protein", "lots"), ("fat", 1)],
)
def test_set_goal_rejects_invalid(
    storage: JournalStorage, metric: str, value: object
) -> None:
    service = UserSettingsService(storage)

    with pytest.raises(ValidationError):
        service.set_goal(metric, value)

    assert service.get_goals() == Goals(2000, 150, 0)


def test_bad_stored_goal_falls_back_to_default(
    storage: JournalStorage, store: FailingKeyValueStore
) -> None:
    store.values["DAILY_PROTEIN_GOAL"] = json.dumps("abc")
    store.values["DAILY_BURN"] = json.dumps(450)

    goals = UserSettingsService(storage).get_goals()

    assert goals.protein == 150
    assert goals.burn == 450


def test_theme_toggle(storage: JournalStorage, store: FailingKeyValueStore) -> None:
    service = UserSettingsService(storage)

    assert service.toggle_theme() == "dark"
    assert json.loads(store.values["hyrox_theme"]) == "dark"
    assert service.toggle_theme() == "light"
    with pytest.raises(ValidationError):
        service.set_theme("sepia")


def test_presets_add_get_delete(
    storage: JournalStorage, store: FailingKeyValueStore
) -> None:
    service = PresetService(storage)

    service.add("  Protein shake ", 180, 30)
    service.add("Apple", 95, 0)

    assert service.get(0) == Preset(name="Protein shake", calories=180, protein=30)
    assert json.loads(store.values["customPresets"])[1] == {
        "name": "Apple",
        "cal": 95,
        "protein": 0,
    }
    assert service.delete(0).name == "Protein shake"
    assert [preset.name for preset in PresetService(storage).list_presets()] == [
        "Apple"
    ]


def test_preset_validation(storage: JournalStorage) -> None:
    service = PresetService(storage)

    with pytest.raises(ValidationError):
        service.add("   ", 100, 10)
    with pytest.raises(ValidationError):
        service.add("Oats", -1, 10)
    with pytest.raises(NotFound):
        service.get(0)

"""Pytest configuration and fixtures."""

import pytest

from gymbook.config import Settings
from gymbook.models.equipment import Equipment
from gymbook.models.muscle import Muscle, SubMuscle
from gymbook.storage.images import ImageStore
from gymbook.storage.kv import MemoryKeyValueStore
from gymbook.store import FitnessStore


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary data directory."""
    return Settings(data_dir=str(tmp_path / "data"))


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def store(kv):
    """An empty store backed by memory."""
    return FitnessStore(kv)


@pytest.fixture
def image_store(tmp_path):
    return ImageStore(tmp_path / "images")


@pytest.fixture
def chest():
    """Chest muscle group with two sub-muscles."""
    return Muscle(
        name="Chest",
        color="#E57373",
        sub_muscles=[
            SubMuscle(name="Upper Chest", color="#EF9A9A"),
            SubMuscle(name="Lower Chest", color="#C62828"),
        ],
    )


@pytest.fixture
def bench_press(chest):
    return Equipment(
        name="Bench Press",
        muscle_id=chest.id,
        sub_muscle_id=chest.sub_muscles[0].id,
        location="Home Gym",
    )

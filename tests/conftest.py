import itertools
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from shelter.api.memory_client import InMemoryRecordsClient

ANIMALS_CSV = (
    "name,species,breed,adoptionFee,isVaccinated,tags,images\r\n"
    'Rex,Dog,Labrador,150,TRUE,"friendly;calm",a.jpg;b.jpg\r\n'
    "Tom,Cat,,75,false,,\r\n"
)


@pytest.fixture()
def memory_client() -> InMemoryRecordsClient:
    return InMemoryRecordsClient(actor="Test Admin")


@pytest.fixture()
def animals_csv_path(tmp_path: Path) -> Path:
    """Write a two-row animals CSV to disk."""
    path = tmp_path / "animals.csv"
    path.write_text(ANIMALS_CSV, encoding="utf-8", newline="")
    return path


@pytest.fixture()
def fixed_clock():
    """Clock returning one minute later on every call, from 2024-01-01 09:00 UTC."""
    start = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    ticks = itertools.count()

    def clock() -> datetime:
        return start + timedelta(minutes=next(ticks))

    return clock

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from shelter.api.memory_client import InMemoryRecordsClient
from shelter.entities import EntityType
from shelter.main import main, parse_args


class TestParseArgs:
    def test_import(self) -> None:
        args = parse_args(["import", "animals", "animals.csv"])
        assert args.command == "import"
        assert args.entity == "animals"
        assert args.path == Path("animals.csv")

    def test_transition_options(self) -> None:
        args = parse_args([
            "transition", "adoption_inquiries", "i1", "Under Review", "--notes", "n", "--actor", "Jane",
        ])
        assert (args.record_id, args.status, args.notes, args.actor) == ("i1", "Under Review", "n", "Jane")

    def test_rejects_unknown_entity(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["import", "cats", "cats.csv"])

    def test_transition_rejects_animals(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["transition", "animals", "a1", "Adopted"])


@pytest.fixture
def client():
    client = InMemoryRecordsClient(actor="Admin")
    with patch("shelter.main.RecordsClientFactory.create", return_value=client):
        yield client


class TestMain:
    def test_import_prints_tally(self, client, animals_csv_path: Path, capsys) -> None:
        code = main(["import", "animals", str(animals_csv_path)])

        assert code == 0
        assert "Import complete. Success: 2, Failed: 0" in capsys.readouterr().out
        assert len(client.fetch_records(EntityType.ANIMALS)) == 2

    def test_missing_file_exits_1(self, client, tmp_path: Path, capsys) -> None:
        code = main(["import", "animals", str(tmp_path / "missing.csv")])

        assert code == 1
        assert "File not found" in capsys.readouterr().err

    def test_export_prints_path(self, client, tmp_path: Path, capsys) -> None:
        client.create_record(EntityType.ANIMALS, {"name": "Rex"})

        code = main(["export", "animals", "--output-dir", str(tmp_path)])

        assert code == 0
        written = Path(capsys.readouterr().out.strip().splitlines()[-1])
        assert written.parent == tmp_path
        assert written.read_text(encoding="utf-8").startswith('"name","species"')

    def test_transition_updates_record(self, client, capsys) -> None:
        animal = client.create_record(EntityType.ANIMALS, {"name": "Rex", "status": "Available"})
        inquiry = client.create_record(
            EntityType.ADOPTION_INQUIRIES, {"status": "Pending", "animal": animal["_id"]}
        )

        code = main(["transition", "adoption_inquiries", inquiry["_id"], "Approved", "--notes", "ok"])

        assert code == 0
        assert "Pending -> Approved" in capsys.readouterr().out
        stored = client.find_record(EntityType.ADOPTION_INQUIRIES, inquiry["_id"])
        assert stored["status"] == "Approved"
        assert client.find_record(EntityType.ANIMALS, animal["_id"])["status"] == "Pending"

    def test_invalid_status_exits_1(self, client, capsys) -> None:
        inquiry = client.create_record(EntityType.ADOPTION_INQUIRIES, {"status": "Pending"})

        code = main(["transition", "adoption_inquiries", inquiry["_id"], "Archived"])

        assert code == 1
        assert "Invalid adoption_inquiry status 'Archived'" in capsys.readouterr().err

    def test_stats(self, client, capsys) -> None:
        client.create_record(EntityType.VOLUNTEERS, {"applicationStatus": "approved"})
        client.create_record(EntityType.VOLUNTEERS, {})

        code = main(["stats", "volunteers"])

        out = capsys.readouterr().out
        assert code == 0
        assert "pending: 1" in out
        assert "approved: 1" in out
        assert "contacted: 0" in out

    def test_closes_client(self, capsys) -> None:
        fake = MagicMock()
        fake.fetch_records.return_value = []
        with patch("shelter.main.RecordsClientFactory.create", return_value=fake):
            main(["stats", "volunteers"])

        fake.close.assert_called_once()

from pathlib import Path

import pytest

from unitroute.data import maps_repository
from unitroute.models.domain import MapRecord
from unitroute.persistence.filesystem import FileStorage
from unitroute.services.routing.errors import MapNotFoundError


@pytest.fixture
def storage_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(maps_repository, "FileStorage", lambda: FileStorage(root=tmp_path))
    return tmp_path


def test_file_storage_creates_maps_and_images_directories(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)

    assert storage.maps_root == tmp_path / "maps"
    assert storage.maps_root.is_dir()
    assert storage.images_root == tmp_path / "maps" / "images"
    assert storage.images_root.is_dir()


def test_file_storage_writes_and_reads_json(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    path = storage.map_json_path("plan")

    storage.write_json(path, {"hello": "world"})

    assert path.read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert storage.read_json(path) == {"hello": "world"}


def test_upload_names_are_sanitized(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)

    name = storage.make_upload_name("../../floor plan (2).png")

    timestamp, _, rest = name.partition("-")
    assert timestamp.isdigit()
    assert rest == "floor_plan_2_.png"
    assert storage.image_path(name).parent == storage.images_root


def test_store_and_load_map_record(storage_root: Path) -> None:
    map_id, image_path = maps_repository.store_map_image("plan.png", b"\x89PNG")
    maps_repository.save_map(
        MapRecord(
            map_id=map_id,
            image_file=image_path.name,
            width=800,
            units=[{"unit": "101", "x": 0.1, "y": "0.2"}],
        )
    )

    record = maps_repository.load_map(map_id)

    assert image_path.read_bytes() == b"\x89PNG"
    assert record.map_id == map_id
    assert record.width == 800
    assert record.height is None
    assert record.units == [{"unit": "101", "x": 0.1, "y": 0.2, "floor": 0}]
    assert maps_repository.map_image_path(map_id) == image_path


def test_replace_units_overwrites_the_set(storage_root: Path) -> None:
    maps_repository.save_map(MapRecord(map_id="m1", image_file=None, units=[{"unit": "1", "x": 0, "y": 0}]))

    record = maps_repository.replace_units("m1", [{"unit": "201", "x": 0.5, "y": 0.5, "floor": 2}])

    assert record.units == [{"unit": "201", "x": 0.5, "y": 0.5, "floor": 2}]
    assert maps_repository.load_map("m1").units == record.units


def test_find_missing_reports_unknown_labels(storage_root: Path) -> None:
    record = MapRecord(
        map_id="m1",
        image_file=None,
        units=[{"unit": "101", "x": 0, "y": 0, "floor": 0}, {"unit": "102", "x": 1, "y": 0, "floor": 0}],
    )

    assert maps_repository.find_missing(record, ["101", "999", "102", "555"]) == ["999", "555"]
    assert maps_repository.find_missing(record, ["101"]) == []


@pytest.mark.parametrize("map_id", ["unknown", "../secrets", ".hidden", ""])
def test_load_map_rejects_unknown_or_unsafe_ids(storage_root: Path, map_id: str) -> None:
    with pytest.raises(MapNotFoundError):
        maps_repository.load_map(map_id)


def test_map_without_image_has_no_image_path(storage_root: Path) -> None:
    maps_repository.save_map(MapRecord(map_id="bare", image_file=None))

    with pytest.raises(MapNotFoundError):
        maps_repository.map_image_path("bare")


def test_json_upload_does_not_clobber_its_record(storage_root: Path) -> None:
    map_id, image_path = maps_repository.store_map_image("plan.json", b"not a record")
    maps_repository.save_map(MapRecord(map_id=map_id, image_file=image_path.name, units=[]))

    record = maps_repository.load_map(map_id)

    assert image_path.read_bytes() == b"not a record"
    assert record.image_file == image_path.name
    assert maps_repository.map_image_path(map_id) == image_path

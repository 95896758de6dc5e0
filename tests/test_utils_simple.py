# Purpose: Simple unit tests for core/utils.py helpers that don't touch external systems.

import pytest

from core.utils import to_snake_case, get_data_folder_path


@pytest.mark.parametrize(
    "name, expected",
    [
        ("checkFavorites", "check_favorites"),
        ("checkILLRequests", "check_ill_requests"),
        ("checkStorageRetrievalRequests", "check_storage_retrieval_requests"),
        ("finesIcon", "fines_icon"),
        ("check_logout", "check_logout"),
        ("", ""),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


def test_get_data_folder_path_relative(tmp_path, write_settings):
    (tmp_path / "Data").mkdir()
    write_settings({"app_config": {"data_folder": "Data"}})
    assert get_data_folder_path(app_root_path=str(tmp_path)) == str(tmp_path / "Data")


def test_get_data_folder_path_absolute(tmp_path, write_settings):
    write_settings({"app_config": {"data_folder": str(tmp_path)}})
    assert get_data_folder_path() == str(tmp_path)


def test_get_data_folder_path_missing_folder(tmp_path, write_settings):
    write_settings({"app_config": {"data_folder": "nope"}})
    with pytest.raises(FileNotFoundError):
        get_data_folder_path(app_root_path=str(tmp_path))

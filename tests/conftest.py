# Add project root to sys.path for module imports
import os, sys
import pytest
import pandas as pd
import yaml

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


def write_csv(path: str, rows: list) -> None:
    """Utility to quickly materialize small CSVs from lists of dicts."""
    df = pd.DataFrame(rows)
    df.to_csv(path, index=False)


@pytest.fixture
def demo_data(tmp_path):
    """Creates minimal demo ILS CSVs under tmp_path for testing."""

    write_csv(
        str(tmp_path / "patrons.csv"),
        [
            {"id": "1", "cat_username": "catuser", "cat_password": "catpass", "firstname": "Alex",
             "lastname": "Reader", "email": "alex@example.org", "home_library": "Main",
             "expiration_date": "2030-01-01"},
            {"id": "2", "cat_username": "jdoe", "cat_password": "secret", "firstname": "Jamie",
             "lastname": "Doe", "email": "jamie@example.org", "home_library": "Branch",
             "expiration_date": "2030-01-01"},
        ],
    )
    write_csv(
        str(tmp_path / "transactions.csv"),
        [
            {"patron_id": "1", "item_id": "1001", "title": "Future Loan", "duedate": "2099-01-15"},
            {"patron_id": "1", "item_id": "1002", "title": "Overdue Loan", "duedate": "2000-03-01"},
            {"patron_id": "2", "item_id": "1003", "title": "Other Patron Loan", "duedate": "2099-02-01"},
        ],
    )
    write_csv(
        str(tmp_path / "transaction_history.csv"),
        [
            {"patron_id": "1", "item_id": "0901", "title": "Older", "checkout_date": "2024-01-10",
             "return_date": "2024-02-01"},
            {"patron_id": "1", "item_id": "0902", "title": "Newer", "checkout_date": "2024-05-03",
             "return_date": "2024-05-30"},
        ],
    )
    write_csv(
        str(tmp_path / "holds.csv"),
        [
            {"patron_id": "1", "item_id": "2001", "title": "Ready Hold", "status": "available",
             "create_date": "2025-09-01"},
            {"patron_id": "1", "item_id": "2002", "title": "Moving Hold", "status": "in_transit",
             "create_date": "2025-09-10"},
        ],
    )
    write_csv(
        str(tmp_path / "fines.csv"),
        [
            {"patron_id": "1", "item_id": "1002", "title": "Overdue Loan", "fine": "Overdue",
             "amount": "4.50", "balance": "4.50"},
            {"patron_id": "1", "item_id": "", "title": "", "fine": "Lost card", "amount": "2.00",
             "balance": "1.25"},
        ],
    )
    write_csv(
        str(tmp_path / "storage_retrieval_requests.csv"),
        [{"patron_id": "1", "item_id": "3001", "title": "Annual Report", "status": "pending",
          "create_date": "2025-10-02"}],
    )
    write_csv(
        str(tmp_path / "ill_requests.csv"),
        [{"patron_id": "1", "item_id": "4001", "title": "Manuscripts", "status": "available",
          "create_date": "2025-09-20"}],
    )
    write_csv(
        str(tmp_path / "user_lists.csv"),
        [
            {"id": "1", "user_id": "1", "title": "Summer Reading", "description": "Holidays",
             "public": "1", "created": "2025-06-01 10:00:00"},
            {"id": "2", "user_id": "1", "title": "Private Notes", "description": "",
             "public": "0", "created": "2025-07-01 10:00:00"},
            {"id": "3", "user_id": "2", "title": "Someone Else", "description": "",
             "public": "1", "created": "2025-07-02 10:00:00"},
        ],
    )
    return str(tmp_path)


DEFAULT_TEST_SETTINGS = {
    "app_config": {"secret_key": "test_secret_key"},
    "Site": {"defaultCurrency": "EUR", "allowSavedSearches": True},
    "Authentication": {"method": "ILS"},
    "Catalog": {"driver": "Demo", "library_cards": True},
    "Demo": {
        "TransactionHistory": {"enabled": True},
        "StorageRetrievalRequests": {"HMACKeys": "item_id"},
        "ILLRequests": {"HMACKeys": "item_id"},
    },
    "Social": {"lists": "enabled"},
    "Overdrive": {"enabled": False},
    "account_menu": {},
}


@pytest.fixture
def write_settings(tmp_path_factory, monkeypatch):
    """Returns a function writing a settings.yaml and pointing the settings loader at it."""
    import core.settings_loader as settings_loader

    settings_dir = tmp_path_factory.mktemp("settings")

    def _write(overrides=None):
        settings = {key: dict(value) for key, value in DEFAULT_TEST_SETTINGS.items()}
        for key, value in (overrides or {}).items():
            settings[key] = value
        path = settings_dir / "settings.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(settings, f)
        monkeypatch.setattr(settings_loader, "SETTINGS_FILE", path)
        settings_loader.reload_settings()
        return settings

    yield _write
    settings_loader.reload_settings()


@pytest.fixture
def app(demo_data, write_settings):
    """Flask app wired to the demo data and test settings."""
    write_settings()
    from app import create_app

    test_app = create_app(
        {
            "TESTING": True,
            "DATA_FOLDER": demo_data,
            "SECRET_KEY": "test_secret_key",
            "SERVER_NAME": "localhost.test",
        }
    )
    yield test_app


@pytest.fixture
def client(app):
    """Flask test client fixture."""
    return app.test_client()


@pytest.fixture
def logged_in_client(client):
    """Test client with the demo patron 'catuser' logged in."""
    resp = client.post(
        "/MyResearch/Login", data={"username": "catuser", "password": "catpass"}
    )
    assert resp.status_code == 302
    return client

# Purpose: Tests for the account area pages in views/myresearch_views.py,
# including the account menu rendered into each page.

import pytest


def test_account_pages_require_login(client):
    resp = client.get("/MyResearch/CheckedOut")
    assert resp.status_code == 302
    assert "/MyResearch/Login" in resp.headers["Location"]


def test_login_page_renders_without_menu(client):
    resp = client.get("/MyResearch/Login")
    assert resp.status_code == 200
    assert b"account-menu-container" not in resp.data


def test_invalid_login_shows_message(client):
    resp = client.post("/MyResearch/Login", data={"username": "catuser", "password": "bad"})
    assert resp.status_code == 200
    assert b"Invalid login" in resp.data


def test_login_redirects_to_next(client):
    resp = client.post(
        "/MyResearch/Login",
        data={"username": "catuser", "password": "catpass", "next": "/Holds/List"},
    )
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/Holds/List")


def test_login_ignores_external_next(client):
    resp = client.post(
        "/MyResearch/Login",
        data={"username": "catuser", "password": "catpass", "next": "//evil.example"},
    )
    assert "evil.example" not in resp.headers["Location"]


def test_home_redirects_to_first_menu_item(logged_in_client):
    resp = logged_in_client.get("/MyResearch/Home")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/MyResearch/Favorites")


def test_checkedout_page_lists_loans_and_menu(logged_in_client):
    resp = logged_in_client.get("/MyResearch/CheckedOut")
    html = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "Future Loan" in html
    assert "Other Patron Loan" not in html
    assert 'class="overdue"' in html
    # menu rendered with the active item and sidebar id prefix
    assert 'id="sidebar-acc-menu-acc-header"' in html
    assert 'class="checkedout active"' in html
    assert "checkedout-status ajax-status" in html
    assert "icon-currency-eur" in html


def test_menu_lists_group_shows_user_lists(logged_in_client):
    html = logged_in_client.get("/MyResearch/Profile").get_data(as_text=True)
    assert "Your Lists" in html
    assert "Summer Reading" in html
    assert "/MyResearch/EditList/NEW" in html


@pytest.mark.parametrize(
    "url, text",
    [
        ("/Checkouts/History", "Newer"),
        ("/Holds/List", "Ready Hold"),
        ("/MyResearch/StorageRetrievalRequests", "Annual Report"),
        ("/MyResearch/ILLRequests", "Manuscripts"),
        ("/MyResearch/Fines", "Lost card"),
        ("/MyResearch/Profile", "Main"),
        ("/MyResearch/Favorites", "Private Notes"),
        ("/LibraryCards/Home", "catuser"),
    ],
)
def test_account_pages(logged_in_client, url, text):
    resp = logged_in_client.get(url)
    assert resp.status_code == 200
    assert text in resp.get_data(as_text=True)


def test_disabled_capability_hides_menu_item(logged_in_client, write_settings):
    write_settings(
        {
            "Demo": {
                "TransactionHistory": {"enabled": True},
                "disabled_methods": ["get_my_fines"],
            }
        }
    )
    html = logged_in_client.get("/MyResearch/Profile").get_data(as_text=True)
    assert "acc-menu-fines" not in html
    assert "acc-menu-storageRetrievalRequests" not in html
    assert "acc-menu-holds" in html


def test_overdrive_hidden_by_default_and_redirects(logged_in_client):
    html = logged_in_client.get("/MyResearch/Profile").get_data(as_text=True)
    assert "acc-menu-dgcontent" not in html
    resp = logged_in_client.get("/Overdrive/MyContent")
    assert resp.status_code == 302


def test_legacy_menu_config(logged_in_client, write_settings):
    write_settings(
        {
            "account_menu": {
                "MenuItems": [
                    {"name": "profile", "label": "My Profile", "route": "myresearch.profile", "icon": "profile"},
                    {"name": "logout", "label": "Log Out", "route": "myresearch.logout",
                     "icon": "sign-out", "checkMethod": "checkLogout"},
                ]
            }
        }
    )
    html = logged_in_client.get("/MyResearch/Profile").get_data(as_text=True)
    assert "My Profile" in html
    assert "acc-menu-checkedout" not in html
    assert "Your Lists" in html


def test_create_list(logged_in_client):
    resp = logged_in_client.post(
        "/MyResearch/EditList/NEW", data={"title": "Weekend", "desc": "Light reading"}
    )
    assert resp.status_code == 302
    html = logged_in_client.get("/MyResearch/Favorites").get_data(as_text=True)
    assert "Weekend" in html


def test_create_list_without_title(logged_in_client):
    resp = logged_in_client.post("/MyResearch/EditList/NEW", data={"title": ""})
    assert resp.status_code == 200
    assert b"A list title is required" in resp.data


def test_search_history_purge(logged_in_client):
    with logged_in_client.session_transaction() as sess:
        sess["search_history"] = ["moravian maps"]
    assert b"moravian maps" in logged_in_client.get("/Search/History").data
    resp = logged_in_client.post("/Search/History", data={"purge": "1"})
    assert b"moravian maps" not in resp.data


def test_logout(logged_in_client):
    resp = logged_in_client.get("/MyResearch/Logout")
    assert resp.status_code == 302
    resp = logged_in_client.get("/MyResearch/Fines")
    assert resp.status_code == 302


def test_no_ils_hides_ils_items(logged_in_client, write_settings):
    write_settings({"Catalog": {"driver": "NoILS", "library_cards": True}, "NoILS": {"mode": "ils-none"},
                    "Authentication": {"method": "Database"}})
    html = logged_in_client.get("/MyResearch/Favorites").get_data(as_text=True)
    assert "acc-menu-checkedout" not in html
    assert "acc-menu-librarycards" not in html
    assert "acc-menu-profile" in html
    assert "acc-menu-logout" in html


def test_loan_history_switched_off(logged_in_client, write_settings):
    write_settings({"Demo": {"TransactionHistory": {"enabled": False}}})
    html = logged_in_client.get("/MyResearch/Profile").get_data(as_text=True)
    assert "acc-menu-historicloans" not in html
    resp = logged_in_client.get("/Checkouts/History")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/MyResearch/Profile")

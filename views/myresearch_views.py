# This file defines the routes of the account area ("My Research").
# Every page renders the account menu with its own item marked active; the
# ILS-backed pages read their records through the configured ILS connection.

"""
Blueprint for the account area: login/logout, loans, holds, fines, lists...
"""
from functools import wraps
from typing import Any, Dict, List

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from config import SESSION_SEARCH_HISTORY_KEY
from ils.drivers import IlsError
from views.view_helpers import get_helpers

myresearch_bp = Blueprint("myresearch", __name__)

PAGE_TEMPLATE = "myresearch/account_page.html"

# Columns shown on the table pages, keyed by active menu item
TABLE_COLUMNS: Dict[str, List[Dict[str, str]]] = {
    "checkedout": [
        {"key": "title", "label": "Title"},
        {"key": "duedate", "label": "Due Date"},
    ],
    "historicloans": [
        {"key": "title", "label": "Title"},
        {"key": "checkout_date", "label": "Checked Out"},
        {"key": "return_date", "label": "Returned"},
    ],
    "holds": [
        {"key": "title", "label": "Title"},
        {"key": "status", "label": "Status"},
        {"key": "create_date", "label": "Created"},
    ],
    "storageRetrievalRequests": [
        {"key": "title", "label": "Title"},
        {"key": "status", "label": "Status"},
        {"key": "create_date", "label": "Created"},
    ],
    "ILLRequests": [
        {"key": "title", "label": "Title"},
        {"key": "status", "label": "Status"},
        {"key": "create_date", "label": "Created"},
    ],
    "fines": [
        {"key": "title", "label": "Title"},
        {"key": "fine", "label": "Fee"},
        {"key": "amount", "label": "Amount"},
        {"key": "balance", "label": "Balance"},
    ],
}


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not get_helpers().auth.is_logged_in():
            return redirect(url_for("myresearch.login", next=request.path))
        return view(*args, **kwargs)

    return wrapped


def _ils_records(method: str) -> List[Dict[str, Any]]:
    """Fetch the logged-in patron's records from the ILS, flashing on failure."""
    helpers = get_helpers()
    patron = helpers.auth.get_ils_patron()
    if not patron:
        flash("Your library account could not be found.", "error")
        return []
    try:
        return helpers.ils.call(method, patron)
    except IlsError as e:
        current_app.logger.error(f"ILS call {method} failed: {e}", exc_info=True)
        flash("The library system is currently unavailable.", "error")
        return []


def _table_page(active: str, title: str, method: str):
    records = _ils_records(method)
    return render_template(
        PAGE_TEMPLATE,
        active=active,
        title=title,
        records=records,
        columns=TABLE_COLUMNS[active],
    )


@myresearch_bp.route("/MyResearch/Login", methods=["GET", "POST"])
def login():
    next_url = request.values.get("next") or url_for("myresearch.home")
    # only local redirects
    if not next_url.startswith("/") or next_url.startswith("//"):
        next_url = url_for("myresearch.home")
    if request.method == "POST":
        user = get_helpers().auth.login(
            request.form.get("username", "").strip(), request.form.get("password", "")
        )
        if user:
            return redirect(next_url)
        flash("Invalid login -- please try again.", "error")
    return render_template("myresearch/login.html", active="login", next_url=next_url)


@myresearch_bp.route("/MyResearch/Logout")
def logout():
    get_helpers().auth.logout()
    flash("You have been logged out.", "info")
    return redirect(url_for("myresearch.login"))


@myresearch_bp.route("/MyResearch/")
@myresearch_bp.route("/MyResearch/Home")
@login_required
def home():
    """Redirect to the first page available in the Account menu group."""
    menu = get_helpers().account_menu.get_menu()
    for item in menu.get("Account", {}).get("MenuItems", []):
        if item.get("route") and item.get("name") != "logout":
            return redirect(url_for(item["route"], **item.get("routeParams", {})))
    return redirect(url_for("myresearch.profile"))


@myresearch_bp.route("/MyResearch/Favorites")
@login_required
def favorites():
    helpers = get_helpers()
    lists = helpers.userlist.get_lists(helpers.auth.get_user_object())
    return render_template(
        "myresearch/favorites.html", active="favorites", title="Saved Items", lists=lists
    )


@myresearch_bp.route("/MyResearch/CheckedOut")
@login_required
def checkedout():
    return _table_page("checkedout", "Checked Out Items", "get_my_transactions")


@myresearch_bp.route("/Checkouts/History")
@login_required
def historicloans():
    if not get_helpers().account_menu.check_historicloans():
        flash("Loan history is not available.", "error")
        return redirect(url_for("myresearch.profile"))
    return _table_page("historicloans", "Loan History", "get_my_transaction_history")


@myresearch_bp.route("/Holds/List")
@login_required
def holds():
    return _table_page("holds", "Holds and Recalls", "get_my_holds")


@myresearch_bp.route("/MyResearch/StorageRetrievalRequests")
@login_required
def storage_retrieval_requests():
    return _table_page(
        "storageRetrievalRequests",
        "Storage Retrieval Requests",
        "get_my_storage_retrieval_requests",
    )


@myresearch_bp.route("/MyResearch/ILLRequests")
@login_required
def ill_requests():
    return _table_page("ILLRequests", "Interlibrary Loan Requests", "get_my_ill_requests")


@myresearch_bp.route("/MyResearch/Fines")
@login_required
def fines():
    return _table_page("fines", "Fines", "get_my_fines")


@myresearch_bp.route("/MyResearch/Profile")
@login_required
def profile():
    helpers = get_helpers()
    profile_data = {}
    patron = helpers.auth.get_ils_patron()
    if patron and helpers.ils.check_capability("get_my_profile", {"patron": patron}):
        try:
            profile_data = helpers.ils.call("get_my_profile", patron)
        except IlsError as e:
            current_app.logger.error(f"Profile lookup failed: {e}", exc_info=True)
            flash("The library system is currently unavailable.", "error")
    return render_template(
        "myresearch/profile.html",
        active="profile",
        title="Profile",
        user=helpers.auth.get_user_object(),
        profile=profile_data,
    )


@myresearch_bp.route("/LibraryCards/Home")
@login_required
def library_cards():
    helpers = get_helpers()
    if not helpers.capabilities.library_cards_enabled():
        flash("Library cards are not enabled.", "error")
        return redirect(url_for("myresearch.home"))
    patron = helpers.auth.get_ils_patron() or {}
    cards = [{"username": patron.get("cat_username", ""), "home_library": patron.get("home_library", "")}]
    return render_template(
        "myresearch/library_cards.html", active="librarycards", title="Library Cards", cards=cards
    )


@myresearch_bp.route("/Overdrive/MyContent")
@login_required
def overdrive_content():
    if not get_helpers().overdrive.show_my_content_link():
        flash("Overdrive content is not available for your account.", "error")
        return redirect(url_for("myresearch.home"))
    return render_template(
        "myresearch/overdrive.html", active="dgcontent", title="Overdrive Content"
    )


@myresearch_bp.route("/Search/History", methods=["GET", "POST"])
def search_history():
    if get_helpers().capabilities.get_saved_search_setting() != "enabled":
        flash("Saved searches are disabled.", "error")
        return redirect(url_for("myresearch.home"))
    if request.method == "POST" and request.form.get("purge"):
        session.pop(SESSION_SEARCH_HISTORY_KEY, None)
        flash("Search history cleared.", "info")
    searches = session.get(SESSION_SEARCH_HISTORY_KEY, [])
    return render_template(
        "myresearch/search_history.html", active="history", title="Search History", searches=searches
    )


@myresearch_bp.route("/MyResearch/EditList/<id>", methods=["GET", "POST"])
@login_required
def edit_list(id):
    helpers = get_helpers()
    if id != "NEW":
        flash("Only new lists can be created here.", "error")
        return redirect(url_for("myresearch.favorites"))
    if request.method == "POST":
        try:
            helpers.userlist.create_list(
                helpers.auth.get_user_object(),
                request.form.get("title", ""),
                request.form.get("desc", ""),
                public=request.form.get("public") == "1",
            )
        except ValueError as e:
            flash(str(e), "error")
        else:
            flash("Your list has been created.", "info")
            return redirect(url_for("myresearch.favorites"))
    return render_template("myresearch/edit_list.html", active="newlist", title="Create a List")

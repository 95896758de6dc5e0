# Purpose: Built-in configuration for the account area navigation menu.
# This file defines the DEFAULT_ACCOUNT_MENU dictionary rendered by myresearch/menu.html
# whenever settings.yaml has no `account_menu` section of its own.
#
# The menu is organized in groups:
# - Account: ILS-backed pages (loans, holds, fines...) plus profile and logout
# - Lists: the user's saved lists and a link to create a new one
#
# Entries with a `checkMethod` are only shown when the named check on
# views.account_menu.AccountMenu returns True for the current request.

import copy

DEFAULT_ACCOUNT_MENU = {
    "Account": {
        "name": "acc",
        "label": "Your Account",
        "id": "acc-menu-acc-header",
        "class": "account-menu",
        "MenuItems": [
            {
                "name": "favorites",
                "label": "Saved Items",
                "route": "myresearch.favorites",
                "icon": "user-favorites",
                "checkMethod": "checkFavorites",
            },
            {
                "name": "checkedout",
                "label": "Checked Out Items",
                "route": "myresearch.checkedout",
                "icon": "user-checked-out",
                "status": True,
                "checkMethod": "checkCheckedout",
            },
            {
                "name": "historicloans",
                "label": "Loan History",
                "route": "myresearch.historicloans",
                "icon": "user-loan-history",
                "checkMethod": "checkHistoricloans",
            },
            {
                "name": "holds",
                "label": "Holds and Recalls",
                "route": "myresearch.holds",
                "icon": "user-holds",
                "status": True,
                "checkMethod": "checkHolds",
            },
            {
                "name": "storageRetrievalRequests",
                "label": "Storage Retrieval Requests",
                "route": "myresearch.storage_retrieval_requests",
                "icon": "user-storage-retrievals",
                "status": True,
                "checkMethod": "checkStorageRetrievalRequests",
            },
            {
                "name": "ILLRequests",
                "label": "Interlibrary Loan Requests",
                "route": "myresearch.ill_requests",
                "icon": "user-ill-requests",
                "status": True,
                "checkMethod": "checkILLRequests",
            },
            {
                "name": "fines",
                "label": "Fines",
                "route": "myresearch.fines",
                "status": True,
                "checkMethod": "checkFines",
                "iconMethod": "finesIcon",
            },
            {
                "name": "profile",
                "label": "Profile",
                "route": "myresearch.profile",
                "icon": "profile",
            },
            {
                "name": "librarycards",
                "label": "Library Cards",
                "route": "myresearch.library_cards",
                "icon": "barcode",
                "checkMethod": "checkLibraryCards",
            },
            {
                "name": "dgcontent",
                "label": "Overdrive Content",
                "route": "myresearch.overdrive_content",
                "icon": "overdrive",
                "checkMethod": "checkOverdrive",
            },
            {
                "name": "history",
                "label": "Search History",
                "route": "myresearch.search_history",
                "icon": "search",
                "checkMethod": "checkHistory",
            },
            {
                "name": "logout",
                "label": "Log Out",
                "route": "myresearch.logout",
                "icon": "sign-out",
                "checkMethod": "checkLogout",
            },
        ],
    },
    "Lists": {
        "label": "Your Lists",
        "id": "acc-menu-lists-header",
        "checkMethod": "checkUserlistMode",
        "MenuItems": [
            {
                "template": "myresearch/menu-mylists.html",
                "icon": "user-list",
            },
            {
                "name": "newlist",
                "label": "Create a List",
                "route": "myresearch.edit_list",
                "routeParams": {"id": "NEW"},
                "icon": "ui-add",
            },
        ],
    },
}


def get_default_menu():
    """Return a fresh copy of the built-in menu that callers may modify."""
    return copy.deepcopy(DEFAULT_ACCOUNT_MENU)

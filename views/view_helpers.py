# Purpose: Builds the account-area view helpers once per request and exposes
# the account menu to every template through a context processor.

from dataclasses import dataclass

from flask import current_app, g

from core.settings_loader import get_account_menu_config
from ils.connection import IlsConnection
from views.account_helpers import (
    AccountCapabilities,
    ContextHelper,
    OverdriveHelper,
    SiteConfigHelper,
    UserlistHelper,
)
from views.account_menu import AccountMenu
from views.auth_helpers import AuthHelper


@dataclass
class AccountHelpers:
    ils: IlsConnection
    auth: AuthHelper
    site_config: SiteConfigHelper
    capabilities: AccountCapabilities
    userlist: UserlistHelper
    overdrive: OverdriveHelper
    context: ContextHelper
    account_menu: AccountMenu


def build_helpers(data_folder=None, menu_config=None) -> AccountHelpers:
    ils = IlsConnection.from_settings(data_folder)
    auth = AuthHelper(ils)
    site_config = SiteConfigHelper()
    capabilities = AccountCapabilities(site_config, ils)
    userlist = UserlistHelper(capabilities, data_folder)
    overdrive = OverdriveHelper(site_config, auth)
    context = ContextHelper()
    account_menu = AccountMenu(
        menu_config, auth, ils, userlist, overdrive, capabilities, site_config, context
    )
    return AccountHelpers(
        ils, auth, site_config, capabilities, userlist, overdrive, context, account_menu
    )


def get_helpers() -> AccountHelpers:
    """Return the helpers of the current request, creating them on first use."""
    if "account_helpers" not in g:
        g.account_helpers = build_helpers(
            data_folder=current_app.config.get("DATA_FOLDER"),
            menu_config=get_account_menu_config(),
        )
    return g.account_helpers


def inject_account_menu():
    """Context processor: makes `account_menu` and `current_user` available in templates."""
    helpers = get_helpers()
    return {
        "account_menu": helpers.account_menu,
        "current_user": helpers.auth.get_user_object(),
    }

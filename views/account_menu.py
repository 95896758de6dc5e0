# Purpose: Account menu view helper.
# Builds the navigation menu of the account area from settings.yaml (or the built-in
# default in core/navigation_config.py), hides entries the current user or ILS cannot
# use, and renders the result with the myresearch/menu.html template.

"""
Account menu view helper.

Menu groups and items may carry a ``checkMethod``: the name of one of the
``check_*`` methods below (camelCase names such as ``checkHolds`` are
accepted too). An entry is shown only when its check returns True, and a
group is shown only when at least one of its items is.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from config import ACCOUNT_MENU_TEMPLATE, DEFAULT_CURRENCY
from core.navigation_config import get_default_menu
from core.utils import to_snake_case

logger = logging.getLogger(__name__)


class AccountMenu:
    def __init__(
        self,
        config: Optional[Dict[str, Any]],
        auth,
        ils,
        userlist,
        overdrive,
        capabilities,
        site_config,
        context,
    ):
        self.config = config or {}
        self.auth = auth
        self.ils = ils
        self.userlist = userlist
        self.overdrive = overdrive
        self.capabilities = capabilities
        self.site_config = site_config
        self.context = context

    def get_menu(self) -> Dict[str, Dict[str, Any]]:
        """Get all groups with items to display."""
        menu = self.config
        if not menu:
            menu = get_default_menu()
        elif menu.get("MenuItems"):
            # outdated configuration with a flat list of account items
            default = get_default_menu()
            default["Account"]["MenuItems"] = menu["MenuItems"]
            menu = default

        available_groups = {}
        for name, group in self.filter_available(menu).items():
            if not isinstance(group, dict):
                continue
            items = self.filter_available(group.get("MenuItems") or [])
            if items:
                available_groups[name] = {**group, "MenuItems": items}
        return available_groups

    def filter_available(self, entries: Union[Dict[str, Any], List[Dict[str, Any]]]):
        """Keep entries without a checkMethod or whose check passes; order is preserved."""
        if isinstance(entries, dict):
            return {
                key: entry for key, entry in entries.items()
                if not isinstance(entry, dict) or self._is_available(entry)
            }
        available = []
        for entry in entries:
            if not isinstance(entry, dict):
                logger.warning(f"Ignoring malformed account menu item {entry!r}")
                continue
            if self._is_available(entry):
                available.append(entry)
        return available

    def _is_available(self, entry: Dict[str, Any]) -> bool:
        check_method = entry.get("checkMethod")
        if not check_method:
            return True
        check = self._resolve(check_method, prefix="check_")
        if check is None:
            logger.warning(f"Unknown account menu check method '{check_method}'; hiding entry")
            return False
        return bool(check())

    def _resolve(self, method_name: str, prefix: str = "", suffix: str = ""):
        name = to_snake_case(method_name)
        if not name.startswith(prefix) or not name.endswith(suffix):
            return None
        method = getattr(self, name, None)
        return method if callable(method) else None

    # --- Checks ---

    def check_favorites(self) -> bool:
        return self.userlist.get_mode() != "disabled"

    def check_checkedout(self) -> bool:
        return self._check_ils_capability("get_my_transactions")

    def check_historicloans(self) -> bool:
        return self._check_ils_function("transaction_history")

    def check_holds(self) -> bool:
        return self._check_ils_capability("get_my_holds")

    def check_storage_retrieval_requests(self) -> bool:
        return self._check_ils_function("StorageRetrievalRequests")

    def check_ill_requests(self) -> bool:
        return self._check_ils_function("ILLRequests")

    def check_fines(self) -> bool:
        return self._check_ils_capability("get_my_fines")

    def check_library_cards(self) -> bool:
        return (
            self.is_ils_online()
            and self.get_user() is not None
            and self.capabilities.library_cards_enabled()
        )

    def check_overdrive(self) -> bool:
        return bool(self.overdrive.show_my_content_link())

    def check_history(self) -> bool:
        return self.capabilities.get_saved_search_setting() == "enabled"

    def check_logout(self) -> bool:
        return self.get_user() is not None

    def check_userlist_mode(self) -> bool:
        return self.get_user() is not None and self.userlist.get_mode() != "disabled"

    # --- ILS ---

    def _check_ils_capability(self, capability: str) -> bool:
        return self.is_ils_online() and bool(
            self.ils.check_capability(capability, self.get_capability_params())
        )

    def _check_ils_function(self, function: str) -> bool:
        return self.is_ils_online() and bool(
            self.ils.check_function(function, self.get_capability_params())
        )

    def is_ils_online(self) -> bool:
        # "ils-offline" still counts: only a site without any ILS hides ILS items
        return self.ils.get_offline_mode() != "ils-none"

    def get_capability_params(self) -> Dict[str, Any]:
        patron = self.auth.get_ils_patron() if self.get_user() else False
        return {"patron": patron} if patron else {}

    # --- Icons ---

    def fines_icon(self) -> str:
        currency = self.site_config.default_currency() or DEFAULT_CURRENCY
        return "currency-" + str(currency).lower()

    def get_item_icon(self, item: Dict[str, Any]) -> Optional[str]:
        """Icon for an item, computed through its iconMethod when it has one."""
        icon_method = item.get("iconMethod")
        if icon_method:
            method = self._resolve(icon_method, suffix="_icon")
            if method is not None:
                return method()
            logger.warning(f"Unknown account menu icon method '{icon_method}'")
        return item.get("icon")

    def get_user(self) -> Optional[Dict[str, Any]]:
        return self.auth.get_user_object()

    def render(self, active_item: str, id_prefix: str = "") -> str:
        """Render the account menu with ``active_item`` highlighted."""
        menu = self.get_menu()
        return self.context.render_in_context(
            ACCOUNT_MENU_TEMPLATE,
            {
                "menu": menu,
                "active": active_item,
                "idPrefix": id_prefix,
                "accountMenu": self,
                # flat list of account items for templates written before groups existed
                "items": menu.get("Account", {}).get("MenuItems", []),
            },
        )

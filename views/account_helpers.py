# Purpose: Small view helpers consulted by the account menu and account pages.
# - AccountCapabilities: which account features (lists, saved searches, library cards) are on
# - UserlistHelper: user list mode and the user's saved lists (CSV in the data folder)
# - OverdriveHelper: whether to link to the user's Overdrive content
# - SiteConfigHelper: read access to settings.yaml sections
# - ContextHelper: render a template with a given set of variables

import os
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd
from flask import render_template

from config import USER_LIST_COLUMNS, USER_LISTS_FILE
from core.settings_loader import get_section

logger = logging.getLogger(__name__)

LIST_MODES = ("enabled", "disabled", "public_only", "private_only")


class SiteConfigHelper:
    """Read-only access to settings sections, e.g. ``get("Site", "defaultCurrency")``."""

    def __init__(self, loader=get_section):
        self.loader = loader

    def get(self, section: str, key: str, default: Any = None) -> Any:
        value = self.loader(section).get(key)
        return default if value is None else value

    def default_currency(self) -> Optional[str]:
        return self.get("Site", "defaultCurrency")


class AccountCapabilities:
    def __init__(self, site_config: SiteConfigHelper, ils=None):
        self.site_config = site_config
        self.ils = ils

    def is_account_available(self) -> bool:
        """Accounts authenticated against the ILS are unavailable while it is offline."""
        method = self.site_config.get("Authentication", "method", "ILS")
        if method == "ILS" and self.ils is not None and self.ils.get_offline_mode():
            return False
        return True

    def get_list_setting(self) -> str:
        if not self.is_account_available():
            return "disabled"
        setting = self.site_config.get("Social", "lists", "enabled")
        if setting is False:
            return "disabled"
        if setting is True:
            return "enabled"
        setting = str(setting).strip().lower()
        if setting not in LIST_MODES:
            logger.warning(f"Unknown Social.lists setting '{setting}', using 'enabled'")
            return "enabled"
        return setting

    def get_saved_search_setting(self) -> str:
        if not self.is_account_available():
            return "disabled"
        allowed = self.site_config.get("Site", "allowSavedSearches", True)
        return "enabled" if allowed else "disabled"

    def library_cards_enabled(self) -> bool:
        return self.is_account_available() and bool(
            self.site_config.get("Catalog", "library_cards", False)
        )


class UserlistHelper:
    def __init__(self, capabilities: AccountCapabilities, data_folder: Optional[str] = None):
        self.capabilities = capabilities
        self.data_folder = data_folder

    def get_mode(self) -> str:
        """One of: enabled, disabled, public_only, private_only."""
        return self.capabilities.get_list_setting()

    def _lists_path(self) -> Optional[str]:
        if not self.data_folder:
            return None
        return os.path.join(self.data_folder, USER_LISTS_FILE)

    def _load_all(self) -> pd.DataFrame:
        path = self._lists_path()
        if not path or not os.path.exists(path) or os.path.getsize(path) == 0:
            return pd.DataFrame(columns=USER_LIST_COLUMNS)
        try:
            return pd.read_csv(path, dtype=str).fillna("")
        except Exception as e:
            logger.error(f"Error loading user lists from {path}: {e}", exc_info=True)
            return pd.DataFrame(columns=USER_LIST_COLUMNS)

    def get_lists(self, user: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Return the lists owned by a user, newest first."""
        if not user:
            return []
        df = self._load_all()
        df = df[df["user_id"] == str(user["id"])]
        if self.get_mode() == "public_only":
            df = df[df["public"] == "1"]
        elif self.get_mode() == "private_only":
            df = df[df["public"] != "1"]
        return df.sort_values(by="created", ascending=False).to_dict("records")

    def create_list(self, user: Dict[str, Any], title: str, description: str = "",
                    public: bool = False) -> Dict[str, Any]:
        """Append a new list for the user and return it."""
        path = self._lists_path()
        if not path:
            raise ValueError("No data folder configured for user lists")
        if not title or not title.strip():
            raise ValueError("A list title is required")
        mode = self.get_mode()
        if mode == "disabled":
            raise ValueError("User lists are disabled")
        if mode == "public_only":
            public = True
        elif mode == "private_only":
            public = False

        df = self._load_all()
        ids = pd.to_numeric(df["id"], errors="coerce").dropna()
        new_list = {
            "id": str(int(ids.max()) + 1 if not ids.empty else 1),
            "user_id": str(user["id"]),
            "title": title.strip(),
            "description": description.strip(),
            "public": "1" if public else "0",
            "created": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        }
        df = pd.concat([df, pd.DataFrame([new_list])], ignore_index=True)
        df[USER_LIST_COLUMNS].to_csv(path, index=False)
        logger.info(f"Created list {new_list['id']} for user {user['id']}")
        return new_list


class OverdriveHelper:
    def __init__(self, site_config: SiteConfigHelper, auth):
        self.site_config = site_config
        self.auth = auth

    def has_access(self) -> bool:
        user = self.auth.get_user_object()
        if not user:
            return False
        allowed = self.site_config.get("Overdrive", "patronsWithAccess", [])
        return user.get("username") in (allowed or [])

    def show_my_content_link(self) -> bool:
        """Decide on the "Overdrive Content" link: always, never or accessOnly."""
        if not self.site_config.get("Overdrive", "enabled", False):
            return False
        mode = self.site_config.get("Overdrive", "showMyContent", "accessOnly")
        if mode == "always":
            return True
        if mode == "accessOnly":
            return self.has_access()
        return False


class ContextHelper:
    def render_in_context(self, template: str, context: Dict[str, Any]) -> str:
        """Render a template with the given variables on top of the request context."""
        return render_template(template, **context)

# Purpose: ILS driver implementations used by ils.connection.IlsConnection.
# - DemoDriver reads patron, loan, hold, fine and request data from CSV files
#   in the data folder (pandas), so the account area can run without a real ILS.
# - NoILSDriver stands in when the catalog has no ILS at all or it is offline.

import os
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from config import (
    PATRONS_FILE,
    TRANSACTIONS_FILE,
    TRANSACTION_HISTORY_FILE,
    HOLDS_FILE,
    FINES_FILE,
    STORAGE_RETRIEVAL_REQUESTS_FILE,
    ILL_REQUESTS_FILE,
    PATRON_ID_COL,
)

logger = logging.getLogger(__name__)


class IlsError(Exception):
    """Raised when the ILS cannot answer a request."""


class AbstractDriver:
    """Common behaviour shared by all drivers."""

    # driver plumbing, never offered as patron-facing ILS methods
    INTERNAL_METHODS = frozenset({"init", "get_config", "supports_method", "get_offline_mode"})

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    def init(self) -> None:
        """Validate configuration; drivers raise IlsError when unusable."""

    def get_config(self, function: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        Return the configuration block for an ILS function, if it is set up.

        A block with a falsy ``enabled`` switches the function off.
        TransactionHistory must be enabled explicitly.
        """
        section = self.config.get(function)
        if not isinstance(section, dict):
            return {"enabled": True} if section else None
        if not section.get("enabled", function != "TransactionHistory"):
            return None
        return section

    def supports_method(self, method: str, params: Optional[Dict[str, Any]] = None) -> bool:
        if method.startswith("_") or method in self.INTERNAL_METHODS:
            return False
        if method in self.config.get("disabled_methods", []):
            return False
        return callable(getattr(self, method, None))


class NoILSDriver(AbstractDriver):
    """Driver used when no ILS is available; it supports no patron functions."""

    def get_offline_mode(self) -> str:
        # "ils-offline": temporarily unavailable; "ils-none": no ILS at all
        mode = self.config.get("mode", "ils-offline")
        return mode if mode in ("ils-offline", "ils-none") else "ils-offline"

    def supports_method(self, method, params=None):
        return False

    def patron_login(self, username, password):
        return None


class DemoDriver(AbstractDriver):
    """
    CSV-backed driver.

    Every file is optional: a missing file simply means the patron has no
    records of that kind. ``patrons.csv`` is required for logins.
    """

    def __init__(self, config=None, data_folder: Optional[str] = None):
        super().__init__(config)
        self.data_folder = data_folder

    def init(self):
        if not self.data_folder or not os.path.isdir(self.data_folder):
            raise IlsError(f"Demo driver data folder not found: {self.data_folder}")

    # --- CSV helpers ---

    def _read(self, filename: str) -> pd.DataFrame:
        path = os.path.join(self.data_folder, filename)
        if not os.path.exists(path) or os.path.getsize(path) == 0:
            return pd.DataFrame()
        try:
            return pd.read_csv(path, dtype=str).fillna("")
        except Exception as e:
            raise IlsError(f"Could not read {filename}: {e}") from e

    def _records_for(self, filename: str, patron: Dict[str, Any]) -> pd.DataFrame:
        df = self._read(filename)
        if df.empty or PATRON_ID_COL not in df.columns:
            return pd.DataFrame()
        return df[df[PATRON_ID_COL] == str(patron["id"])].copy()

    def _append(self, filename: str, row: Dict[str, Any]) -> None:
        path = os.path.join(self.data_folder, filename)
        df = self._read(filename)
        df = pd.concat([df, pd.DataFrame([row])], ignore_index=True)
        df.to_csv(path, index=False)

    # --- Patron functions ---

    def patron_login(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        patrons = self._read(PATRONS_FILE)
        if patrons.empty:
            logger.warning("Demo driver has no patrons; login impossible")
            return None
        match = patrons[
            (patrons["cat_username"] == username) & (patrons["cat_password"] == password)
        ]
        if match.empty:
            return None
        patron = match.iloc[0].to_dict()
        patron.pop("cat_password", None)
        return patron

    def get_my_profile(self, patron):
        patrons = self._read(PATRONS_FILE)
        if patrons.empty:
            return {}
        match = patrons[patrons["id"] == str(patron["id"])]
        if match.empty:
            return {}
        profile = match.iloc[0].to_dict()
        profile.pop("cat_password", None)
        return profile

    def get_my_transactions(self, patron) -> List[Dict[str, Any]]:
        df = self._records_for(TRANSACTIONS_FILE, patron)
        if df.empty:
            return []
        due = pd.to_datetime(df["duedate"], errors="coerce")
        today = pd.Timestamp(datetime.now().date())
        df["overdue"] = due < today
        return df.to_dict("records")

    def get_my_transaction_history(self, patron):
        df = self._records_for(TRANSACTION_HISTORY_FILE, patron)
        if df.empty:
            return []
        df = df.sort_values(by="checkout_date", ascending=False)
        return df.to_dict("records")

    def get_my_holds(self, patron):
        df = self._records_for(HOLDS_FILE, patron)
        if df.empty:
            return []
        df["available"] = df["status"] == "available"
        df["in_transit"] = df["status"] == "in_transit"
        return df.to_dict("records")

    def get_my_fines(self, patron):
        df = self._records_for(FINES_FILE, patron)
        if df.empty:
            return []
        df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0)
        df["balance"] = pd.to_numeric(df["balance"], errors="coerce").fillna(0.0)
        return df.to_dict("records")

    def get_my_storage_retrieval_requests(self, patron):
        return self._records_for(STORAGE_RETRIEVAL_REQUESTS_FILE, patron).to_dict("records")

    def check_storage_retrieval_request_is_valid(self, item_id, data, patron) -> bool:
        return bool(item_id) and bool(patron)

    def place_storage_retrieval_request(self, details):
        return self._place_request(STORAGE_RETRIEVAL_REQUESTS_FILE, details)

    def get_my_ill_requests(self, patron):
        return self._records_for(ILL_REQUESTS_FILE, patron).to_dict("records")

    def check_ill_request_is_valid(self, item_id, data, patron):
        return bool(item_id) and bool(patron)

    def place_ill_request(self, details):
        return self._place_request(ILL_REQUESTS_FILE, details)

    def _place_request(self, filename, details):
        patron = details.get("patron")
        if not patron or not details.get("item_id"):
            return {"success": False, "sysMessage": "Missing patron or item"}
        self._append(
            filename,
            {
                PATRON_ID_COL: str(patron["id"]),
                "item_id": details["item_id"],
                "title": details.get("title", ""),
                "status": "pending",
                "create_date": datetime.now().strftime("%Y-%m-%d"),
            },
        )
        logger.info(f"Placed request in {filename} for patron {patron['id']}")
        return {"success": True}

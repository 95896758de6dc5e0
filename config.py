# Purpose: This file defines configuration constants for the library account area.
# It centralizes file names of the demo ILS data, template names and session keys
# so they can be adjusted without modifying the application code.
# Site-specific settings (ILS driver, currency, menu overrides) live in settings.yaml
# and are read through core.settings_loader.

import os
from pathlib import Path

# Base directory of the application
BASE_DIR = Path(__file__).resolve().parent

# Default data folder (relative to BASE_DIR) when settings.yaml does not name one
DEFAULT_DATA_FOLDER = os.environ.get("ACCOUNT_DATA_FOLDER", "Data")

# --- Demo ILS data files ---
PATRON_ID_COL = "patron_id"
PATRONS_FILE = "patrons.csv"
TRANSACTIONS_FILE = "transactions.csv"
TRANSACTION_HISTORY_FILE = "transaction_history.csv"
HOLDS_FILE = "holds.csv"
FINES_FILE = "fines.csv"
STORAGE_RETRIEVAL_REQUESTS_FILE = "storage_retrieval_requests.csv"
ILL_REQUESTS_FILE = "ill_requests.csv"

# --- User lists ---
USER_LISTS_FILE = "user_lists.csv"
USER_LIST_COLUMNS = ["id", "user_id", "title", "description", "public", "created"]

# --- Templates ---
ACCOUNT_MENU_TEMPLATE = "myresearch/menu.html"

# --- Session keys ---
SESSION_USER_KEY = "user"
SESSION_PATRON_KEY = "ils_patron"
SESSION_SEARCH_HISTORY_KEY = "search_history"

# Currency of the fines icon when Site.defaultCurrency is not set
DEFAULT_CURRENCY: str = "USD"

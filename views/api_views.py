# Purpose: JSON endpoints used by the account menu.
# Menu items flagged with `status: true` get a badge that the page fills in by
# calling /api/account/status after it has loaded.

"""
API blueprint for account status badges.
"""
from typing import Any, Dict, List

from flask import Blueprint, current_app, jsonify

from ils.drivers import IlsError
from views.view_helpers import get_helpers

api_bp = Blueprint("api_bp", __name__, url_prefix="/api")


def summarize_transactions(records: List[Dict[str, Any]]) -> Dict[str, Any]:
    overdue = sum(1 for r in records if r.get("overdue"))
    return {"count": len(records), "overdue": overdue, "level": "danger" if overdue else "normal"}


def summarize_holds(records):
    available = sum(1 for r in records if r.get("available"))
    in_transit = sum(1 for r in records if r.get("in_transit"))
    return {
        "count": len(records),
        "available": available,
        "in_transit": in_transit,
        "level": "good" if available else "normal",
    }


def summarize_fines(records):
    total = round(sum(float(r.get("balance") or 0) for r in records), 2)
    return {
        "count": len(records),
        "total": total,
        "currency": get_helpers().site_config.default_currency(),
        "level": "warning" if total > 0 else "normal",
    }


def summarize_requests(records):
    available = sum(1 for r in records if r.get("status") == "available")
    return {"count": len(records), "available": available, "level": "good" if available else "normal"}


# Menu item name -> (ILS method, summary function)
STATUS_SOURCES: Dict[str, tuple] = {
    "checkedout": ("get_my_transactions", summarize_transactions),
    "holds": ("get_my_holds", summarize_holds),
    "fines": ("get_my_fines", summarize_fines),
    "storageRetrievalRequests": ("get_my_storage_retrieval_requests", summarize_requests),
    "ILLRequests": ("get_my_ill_requests", summarize_requests),
}


@api_bp.route("/account/status")
def account_status():
    """Return status badge data for every visible menu item that asks for one."""
    helpers = get_helpers()
    patron = helpers.auth.get_ils_patron()
    if not patron:
        return jsonify({"status": "error", "message": "You must be logged in first"}), 401

    statuses: Dict[str, Any] = {}
    for group in helpers.account_menu.get_menu().values():
        for item in group["MenuItems"]:
            name = item.get("name")
            if not item.get("status") or name not in STATUS_SOURCES:
                continue
            method, summarize = STATUS_SOURCES[name]
            try:
                statuses[name] = summarize(helpers.ils.call(method, patron))
            except IlsError as e:
                current_app.logger.error(f"Status lookup {method} failed: {e}", exc_info=True)
                statuses[name] = {"level": "unavailable"}
    return jsonify({"status": "success", "data": statuses})

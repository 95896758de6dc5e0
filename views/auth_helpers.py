# Purpose: Session-based authentication helper for the account area.
# Users log in with their library credentials, which are checked by the ILS
# driver (`patron_login`); the resulting patron record is kept in the Flask session.

import logging
from typing import Any, Dict, Optional, Union

from flask import session as flask_session

from config import SESSION_PATRON_KEY, SESSION_USER_KEY
from ils.connection import IlsConnection
from ils.drivers import IlsError

logger = logging.getLogger(__name__)


class AuthHelper:
    def __init__(self, ils: IlsConnection, session=None):
        self.ils = ils
        self.session = flask_session if session is None else session

    def get_user_object(self) -> Optional[Dict[str, Any]]:
        """Return the logged-in user, or None."""
        return self.session.get(SESSION_USER_KEY) or None

    def is_logged_in(self) -> bool:
        return self.get_user_object() is not None

    def get_ils_patron(self) -> Union[Dict[str, Any], bool]:
        """Return the ILS patron of the logged-in user, or False."""
        if not self.is_logged_in():
            return False
        return self.session.get(SESSION_PATRON_KEY) or False

    def login(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        """Check credentials against the ILS and start a session on success."""
        if not username or not password:
            return None
        try:
            patron = self.ils.call("patron_login", username, password)
        except IlsError as e:
            logger.error(f"ILS login failed for {username}: {e}")
            return None
        if not patron:
            logger.info(f"Invalid credentials for {username}")
            return None

        user = {
            "id": str(patron["id"]),
            "username": patron.get("cat_username", username),
            "firstname": patron.get("firstname", ""),
            "lastname": patron.get("lastname", ""),
            "email": patron.get("email", ""),
        }
        self.session[SESSION_USER_KEY] = user
        self.session[SESSION_PATRON_KEY] = patron
        logger.info(f"User {user['username']} logged in")
        return user

    def logout(self) -> None:
        user = self.get_user_object()
        self.session.pop(SESSION_USER_KEY, None)
        self.session.pop(SESSION_PATRON_KEY, None)
        if user:
            logger.info(f"User {user['username']} logged out")

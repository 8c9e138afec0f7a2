"""Local sign-in stub.

Remembers who is using the tool on this device. There is no password check;
this is not an authentication mechanism.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from foamdesk.models.records import UserSession

if TYPE_CHECKING:
    from foamdesk.data.repository import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_COMPANY = "My Spray Foam Co"


def login(store: RecordStore, username: str, company: str = "") -> UserSession:
    user = UserSession(username=username, company=company or DEFAULT_COMPANY)
    store.save_user(user)
    logger.info("Signed in %s (%s)", user.username, user.company)
    return user


def logout(store: RecordStore) -> None:
    store.clear_user()


def current_user(store: RecordStore) -> UserSession | None:
    return store.get_user()

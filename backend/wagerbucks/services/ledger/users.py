from typing import List

from flask import current_app
from sqlalchemy.exc import IntegrityError

from wagerbucks.errors import Conflict, InvalidRequest, NotFound
from wagerbucks.models import STARTING_BALANCE, User
from .gateway import LedgerGateway


def normalize_external_id(value) -> str:
    """Return the platform identifier as a string.

    Platforms such as Discord hand out 64-bit unsigned ids, so integers are
    kept as their full decimal text rather than squeezed into a column type.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidRequest('externalId is required')
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise InvalidRequest('externalId must be a string or integer')


def list_users(gateway: LedgerGateway) -> List[User]:
    return gateway.list_users()


def get_user(gateway: LedgerGateway, external_id: str) -> User:
    user = gateway.find_user(external_id)
    if user is None:
        raise NotFound(f'user {external_id} not found')
    return user


def create_user(gateway: LedgerGateway, external_id: str, display_name: str) -> User:
    """Insert a user with the starting balance; Conflict if the id is taken."""
    if gateway.find_user(external_id) is not None:
        raise Conflict('user already exists')
    try:
        user = gateway.insert_user(external_id, display_name, STARTING_BALANCE)
        gateway.commit()
    except IntegrityError:
        # Another request inserted the same external id after our lookup
        gateway.rollback()
        raise Conflict('user already exists')
    current_app.logger.info(f"[user-create] external_id={external_id} balance={user.balance}")
    return user


def get_or_create_user(gateway: LedgerGateway, external_id: str, display_name: str) -> User:
    """Resolve a user, inserting one with the starting balance if unseen.

    The insert is flushed but not committed; the caller owns the transaction.
    """
    user = gateway.find_user(external_id)
    if user is None:
        user = gateway.insert_user(external_id, display_name, STARTING_BALANCE)
        current_app.logger.info(f"[user-create] external_id={external_id} implicit=true")
    return user

from flask import current_app

from wagerbucks.errors import AlreadyClosed, InsufficientFunds, InvalidRequest, NotAParticipant, NotFound
from wagerbucks.models import MAX_STAKE, Wager
from .gateway import LedgerGateway
from .users import get_or_create_user


def _validate_stake(stake) -> int:
    # bool is an int subclass; True is not a stake
    if isinstance(stake, bool) or not isinstance(stake, int):
        raise InvalidRequest('stake must be an integer')
    if stake <= 0:
        raise InvalidRequest('stake must be greater than zero')
    if stake > MAX_STAKE:
        raise InvalidRequest(f'stake must not exceed {MAX_STAKE}')
    return stake


def create_wager(gateway: LedgerGateway, stake) -> Wager:
    stake = _validate_stake(stake)
    wager = gateway.insert_wager(stake)
    gateway.commit()
    current_app.logger.info(f"[wager-create] wager={wager.id} stake={wager.stake}")
    return wager


def get_wager(gateway: LedgerGateway, wager_id: int) -> Wager:
    wager = gateway.find_wager(wager_id)
    if wager is None:
        raise NotFound('wager not found')
    return wager


def add_user_to_wager(gateway: LedgerGateway, external_id: str, display_name: str, wager_id: int) -> None:
    """Join a user to an open wager.

    - Unknown users are created with the starting balance.
    - Joining twice is a no-op.
    - The balance must cover the stake. It is only checked here; bucks
      move at settlement.
    """
    try:
        wager = get_wager(gateway, wager_id)
        if wager.closed:
            raise AlreadyClosed('wager already closed', status_code=400)

        user = get_or_create_user(gateway, external_id, display_name)
        if gateway.find_participation(wager.id, user.id) is not None:
            return

        if user.balance < wager.stake:
            raise InsufficientFunds('user does not have enough bucks for this wager')

        gateway.insert_participation(wager.id, user.id)
        gateway.commit()
    except Exception:
        gateway.rollback()
        raise
    current_app.logger.info(f"[join] wager={wager.id} user={user.id} balance={user.balance} stake={wager.stake}")


def remove_user_from_wager(gateway: LedgerGateway, external_id: str, wager_id: int) -> None:
    try:
        wager = gateway.find_wager(wager_id)
        user = gateway.find_user(external_id)
        if wager is None or user is None or gateway.find_participation(wager.id, user.id) is None:
            raise NotAParticipant('user is not part of this wager')
        if wager.closed:
            raise AlreadyClosed('wager already closed', status_code=400)
        gateway.delete_participation(wager.id, user.id)
        gateway.commit()
    except Exception:
        gateway.rollback()
        raise
    current_app.logger.info(f"[leave] wager={wager.id} user={user.id}")

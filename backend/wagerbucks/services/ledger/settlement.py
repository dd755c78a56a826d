from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from flask import current_app

from wagerbucks.errors import AlreadyClosed, NotFound
from wagerbucks.models import User, Wager
from .gateway import LedgerGateway


@dataclass
class Settlement:
    """Outcome of closing a wager, with post-settlement balances."""

    wager: Wager
    winners: List[User] = field(default_factory=list)
    losers: List[User] = field(default_factory=list)
    payout: int = 0

    def to_dict(self):
        return {
            'winners': [u.to_dict() for u in self.winners],
            'losers': [u.to_dict() for u in self.losers],
            'wager': self.wager.to_dict(),
        }


def partition_participants(
    participants: Iterable[User],
    winning_external_ids: Iterable[str],
    losing_external_ids: Iterable[str],
) -> Tuple[List[User], List[User]]:
    """Split participants into (winners, losers).

    A participant named on both sides counts as a winner. Participants on
    neither side are left out entirely.
    """
    winning = set(winning_external_ids)
    losing = set(losing_external_ids)
    winners, losers = [], []
    for user in participants:
        if user.external_id in winning:
            winners.append(user)
        elif user.external_id in losing:
            losers.append(user)
    return winners, losers


def compute_payout(stake: int, winner_count: int, loser_count: int) -> int:
    """Bucks credited to each winner.

    The losers' stakes are split evenly with floor division; any remainder
    is not paid out.
    """
    if winner_count <= 0:
        return 0
    return stake * loser_count // winner_count


def close_wager(
    gateway: LedgerGateway,
    wager_id: int,
    winning_external_ids: Iterable[str],
    losing_external_ids: Iterable[str],
) -> Settlement:
    """Settle a wager exactly once.

    Runs as one transaction: the wager row is locked, balances are moved,
    and the closed flag is flipped with a compare-and-set. If another
    request closed the wager first, or any write fails, everything rolls
    back.
    """
    try:
        wager = gateway.find_wager(wager_id, lock=True)
        if wager is None:
            raise NotFound('wager not found', status_code=417)
        if wager.closed:
            raise AlreadyClosed('wager already closed')

        participants = gateway.participants(wager.id)
        winners, losers = partition_participants(participants, winning_external_ids, losing_external_ids)
        payout = compute_payout(wager.stake, len(winners), len(losers))

        for user in winners:
            gateway.set_balance(user, user.balance + payout)
        for user in losers:
            gateway.set_balance(user, max(0, user.balance - wager.stake))

        if gateway.mark_closed(wager.id) != 1:
            raise AlreadyClosed('wager already closed')
        gateway.commit()
    except Exception:
        gateway.rollback()
        raise

    current_app.logger.info(
        f"[close] wager={wager.id} stake={wager.stake} participants={len(participants)} "
        f"winners={len(winners)} losers={len(losers)} payout={payout}"
    )
    return Settlement(wager=wager, winners=winners, losers=losers, payout=payout)

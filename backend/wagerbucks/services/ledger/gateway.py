from typing import List, Optional

from wagerbucks.models import User, UserWager, Wager


class LedgerGateway:
    """Parameterized reads and writes against user, wager and user_wager.

    Holds no business rules. Writes are flushed so generated ids are
    available immediately, but nothing is committed until ``commit`` is
    called, which lets an operation group several writes into one
    transaction.
    """

    def __init__(self, session):
        self.session = session

    # ---- users ----

    def list_users(self) -> List[User]:
        return self.session.query(User).order_by(User.id).all()

    def find_user(self, external_id: str) -> Optional[User]:
        return self.session.query(User).filter_by(external_id=external_id).first()

    def insert_user(self, external_id: str, display_name: str, balance: int) -> User:
        user = User(external_id=external_id, display_name=display_name, balance=balance)
        self.session.add(user)
        self.session.flush()
        return user

    def set_balance(self, user: User, balance: int) -> None:
        user.balance = balance
        self.session.add(user)

    # ---- wagers ----

    def find_wager(self, wager_id: int, lock: bool = False) -> Optional[Wager]:
        query = self.session.query(Wager).filter_by(id=wager_id)
        if lock:
            # SELECT ... FOR UPDATE; a no-op on SQLite
            query = query.with_for_update()
        return query.first()

    def insert_wager(self, stake: int) -> Wager:
        wager = Wager(stake=stake, closed=False)
        self.session.add(wager)
        self.session.flush()
        return wager

    def mark_closed(self, wager_id: int) -> int:
        """Flip closed only if it is still open. Returns the matched row count."""
        return (
            self.session.query(Wager)
            .filter_by(id=wager_id, closed=False)
            .update({'closed': True}, synchronize_session='evaluate')
        )

    # ---- participations ----

    def find_participation(self, wager_id: int, user_id: int) -> Optional[UserWager]:
        return self.session.query(UserWager).filter_by(wager_id=wager_id, user_id=user_id).first()

    def insert_participation(self, wager_id: int, user_id: int) -> UserWager:
        participation = UserWager(wager_id=wager_id, user_id=user_id)
        self.session.add(participation)
        self.session.flush()
        return participation

    def delete_participation(self, wager_id: int, user_id: int) -> int:
        participation = self.find_participation(wager_id, user_id)
        if participation is None:
            return 0
        self.session.delete(participation)
        self.session.flush()
        return 1

    def participants(self, wager_id: int) -> List[User]:
        return (
            self.session.query(User)
            .join(UserWager, UserWager.user_id == User.id)
            .filter(UserWager.wager_id == wager_id)
            .order_by(User.id)
            .all()
        )

    # ---- transaction ----

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

from wagerbucks import db

# Every new user starts with this many bucks
STARTING_BALANCE = 500

# Stakes fit a 32-bit column
MAX_STAKE = 2**31 - 1

# 64-bit keys on real databases; SQLite only autoincrements INTEGER
BigId = db.BigInteger().with_variant(db.Integer, 'sqlite')


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(BigId, primary_key=True)
    external_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(128), nullable=False)
    balance = db.Column(db.BigInteger, nullable=False, default=STARTING_BALANCE)
    participations = db.relationship('UserWager', back_populates='user')

    def to_dict(self):
        return {
            'id': self.id,
            'externalId': self.external_id,
            'displayName': self.display_name,
            'balance': self.balance,
        }

class Wager(db.Model):
    __tablename__ = 'wager'
    id = db.Column(BigId, primary_key=True)
    stake = db.Column(db.Integer, nullable=False)
    closed = db.Column(db.Boolean, default=False, nullable=False)
    participations = db.relationship('UserWager', back_populates='wager')

    def to_dict(self, include_participants=False):
        data = {
            'id': self.id,
            'stake': self.stake,
            'closed': self.closed,
        }
        if include_participants:
            data['participants'] = [p.user.to_dict() for p in self.participations]
        return data

class UserWager(db.Model):
    __tablename__ = 'user_wager'
    __table_args__ = (
        db.UniqueConstraint('wager_id', 'user_id', name='uq_user_wager_wager_user'),
    )
    id = db.Column(BigId, primary_key=True)
    wager_id = db.Column(BigId, db.ForeignKey('wager.id'), nullable=False, index=True)
    user_id = db.Column(BigId, db.ForeignKey('user.id'), nullable=False)
    wager = db.relationship('Wager', back_populates='participations')
    user = db.relationship('User', back_populates='participations')

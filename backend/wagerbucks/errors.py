"""Ledger error kinds.

Operations raise these; the HTTP layer turns them into
``{'error': message}`` bodies with the attached status code.
"""


class LedgerError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class InvalidRequest(LedgerError):
    status_code = 400


class NotFound(LedgerError):
    status_code = 404


class Conflict(LedgerError):
    status_code = 409


class AlreadyClosed(LedgerError):
    status_code = 417


class InsufficientFunds(LedgerError):
    status_code = 400


class NotAParticipant(LedgerError):
    status_code = 400


class PersistenceFailure(LedgerError):
    status_code = 417

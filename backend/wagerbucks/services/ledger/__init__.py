"""Ledger domain services: user/wager lifecycle and settlement.

This package contains the bucks ledger logic imported by HTTP routes,
keeping transport concerns separated from balance mechanics. Every
operation takes a ``LedgerGateway`` as its first argument so callers
decide which session (or fake) the work runs against.
"""

from .gateway import LedgerGateway
from .settlement import Settlement, close_wager, compute_payout, partition_participants
from .users import create_user, get_or_create_user, get_user, list_users, normalize_external_id
from .wagers import add_user_to_wager, create_wager, get_wager, remove_user_from_wager

from flask import Blueprint, jsonify

from wagerbucks import db, socketio
from wagerbucks.errors import InvalidRequest
from wagerbucks.api.payload import json_object
from wagerbucks.services.ledger import (
    LedgerGateway,
    add_user_to_wager,
    close_wager,
    create_wager,
    get_wager,
    normalize_external_id,
    remove_user_from_wager,
)


wagers = Blueprint('wagers', __name__)


def _wager_id(data) -> int:
    wager_id = data.get('wagerId')
    if isinstance(wager_id, bool) or not isinstance(wager_id, int):
        raise InvalidRequest('wagerId must be an integer')
    return wager_id


def _external_ids(data, key):
    values = data.get(key) or []
    if not isinstance(values, list):
        raise InvalidRequest(f'{key} must be a list')
    return [normalize_external_id(v) for v in values]


def _notify(wager_id: int, closed: bool) -> None:
    socketio.emit('wager_update', {'wager_id': wager_id, 'closed': closed}, to=f"wager:{wager_id}", namespace='/ws')


@wagers.route('/wager', methods=['POST'])
def create_wager_route():
    data = json_object()
    wager = create_wager(LedgerGateway(db.session), data.get('stake'))
    return jsonify(wager.to_dict()), 200


@wagers.route('/wager/<int:wager_id>', methods=['GET'])
def get_wager_route(wager_id):
    wager = get_wager(LedgerGateway(db.session), wager_id)
    return jsonify(wager.to_dict(include_participants=True))


@wagers.route('/wager', methods=['PATCH'])
def close_wager_route():
    data = json_object()
    settlement = close_wager(
        LedgerGateway(db.session),
        _wager_id(data),
        _external_ids(data, 'winningExternalIds'),
        _external_ids(data, 'losingExternalIds'),
    )
    _notify(settlement.wager.id, True)
    return jsonify(settlement.to_dict()), 200


@wagers.route('/user/wager', methods=['POST'])
def add_user_to_wager_route():
    data = json_object()
    display_name = data.get('displayName')
    if not display_name or not isinstance(display_name, str):
        raise InvalidRequest('displayName is required')
    wager_id = _wager_id(data)
    add_user_to_wager(LedgerGateway(db.session), normalize_external_id(data.get('externalId')), display_name, wager_id)
    _notify(wager_id, False)
    return jsonify(data), 200


@wagers.route('/user/wager', methods=['DELETE'])
def remove_user_from_wager_route():
    data = json_object()
    wager_id = _wager_id(data)
    remove_user_from_wager(LedgerGateway(db.session), normalize_external_id(data.get('externalId')), wager_id)
    _notify(wager_id, False)
    return jsonify(data), 200

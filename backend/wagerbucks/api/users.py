from flask import Blueprint, jsonify, request

from wagerbucks import db
from wagerbucks.errors import InvalidRequest
from wagerbucks.api.payload import json_object
from wagerbucks.services.ledger import LedgerGateway, create_user, get_user, list_users, normalize_external_id


users = Blueprint('users', __name__)


@users.route('/users', methods=['GET'])
def list_all_users():
    gateway = LedgerGateway(db.session)
    return jsonify([u.to_dict() for u in list_users(gateway)])


@users.route('/user', methods=['GET'])
def get_user_by_external_id():
    external_id = request.args.get('externalId')
    if not external_id:
        return jsonify({'error': 'externalId query parameter is required'}), 400
    user = get_user(LedgerGateway(db.session), normalize_external_id(external_id))
    return jsonify(user.to_dict())


@users.route('/user', methods=['POST'])
def create_user_route():
    data = json_object()
    display_name = data.get('displayName')
    if not display_name or not isinstance(display_name, str):
        raise InvalidRequest('displayName is required')
    external_id = normalize_external_id(data.get('externalId'))
    create_user(LedgerGateway(db.session), external_id, display_name)
    return jsonify({'message': 'user created'}), 200

from flask import request

from wagerbucks.errors import InvalidRequest


def json_object() -> dict:
    """Return the request's JSON body, which must be an object when present."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest('request body must be a JSON object')
    return data

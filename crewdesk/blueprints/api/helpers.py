"""
API helper functions: request parsing, error formatting, response builders.
"""
from flask import request, jsonify
from marshmallow import ValidationError


def api_error(code, message, status=400, details=None):
    """Build a standard API error response."""
    error_body = {
        'error': {
            'code': code,
            'message': message,
        }
    }
    if details:
        error_body['error']['details'] = details
    return jsonify(error_body), status


def api_success(data, status=200):
    """Build a standard API success response."""
    return jsonify({'data': data}), status


def _validation_details(messages):
    details = []
    for field, errors in messages.items():
        if isinstance(errors, dict):
            errors = [str(errors)]
        for message in errors:
            details.append({'field': field, 'message': message})
    return details


def load_json(schema):
    """Validate the JSON body with a marshmallow schema.

    Returns:
        (data, None) on success, (None, error_response) otherwise
    """
    data = request.get_json(silent=True)
    if data is None or not isinstance(data, dict):
        return None, api_error('invalid_json', 'Request body must be a JSON object.', 400)
    try:
        return schema.load(data), None
    except ValidationError as err:
        return None, api_error('validation_error', 'Invalid request body.', 422,
                               details=_validation_details(err.messages))


def load_args(schema):
    """Validate query parameters with a marshmallow schema."""
    try:
        return schema.load(request.args.to_dict()), None
    except ValidationError as err:
        return None, api_error('validation_error', 'Invalid query parameters.', 422,
                               details=_validation_details(err.messages))

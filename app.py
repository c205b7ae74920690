"""Minimal POST-based API for on-duty group resolution."""
from datetime import date
from flask import Flask, jsonify, request
from schema import SchemaError
from training_manager import (build, parse_date, validate, raise_for_errors,
                              resolve, assign, format_result, role_payloads,
                              AssignmentError, OverlapError)
from training_manager.constants import DATE_FORMAT, DEFAULT_ROLE
from werkzeug.exceptions import default_exceptions
from werkzeug.exceptions import HTTPException

app = Flask(__name__)


@app.errorhandler(Exception)
def handle_generic_error(error):
    # https://stackoverflow.com/a/29332131
    if isinstance(error, HTTPException):
        code = error.code
        error = str(error)
        app.logger.error(f'HTTP error {code}: {error}')
    else:
        code = 500
        app.logger.error(f'Internal error: {error!r}', exc_info=error)
        error = 'Unknown internal error.'
    return jsonify(error=error), code


# Enable JSON error handling. (see https://stackoverflow.com/a/29332131)
for code in default_exceptions:
    app.register_error_handler(code, handle_generic_error)


@app.route('/', methods=['POST'])
def schedule():
    """Main endpoint for resolving the on-duty group."""
    if not request.is_json:
        raise InvalidUsage('Expected content-type is application/json.')
    body = request.get_json()
    params = parse_request(body)
    config = params['config']

    for warning in params['warnings']:
        app.logger.warning(warning.message)
    outcome = resolve(config, params['date'])
    try:
        result = assign(config, outcome, first_match=params['first_match'])
    except AssignmentError as ex:
        app.logger.error('Assignment error.', exc_info=True)
        raise InvalidUsage(f'Assignment error: {ex.message}', 409,
                           payload={'groups': list(getattr(ex, 'groups', ()))})
    response = {
        'result': format_result(result, params['date']),
        'findings': [finding_dict(f) for f in params['warnings']]
    }
    if params['payloads']:
        response['payloads'] = role_payloads(config, result, params['role'])
    return jsonify(response)


def finding_dict(finding):
    """Serializes a validation finding."""
    return {
        'level': finding.level,
        'code': finding.code,
        'message': finding.message,
        'groups': list(finding.groups),
        'dates': ([d.strftime(DATE_FORMAT) for d in finding.dates]
                  if finding.dates else None)
    }


def parse_request(body):
    if not isinstance(body, dict) or 'config' not in body:
        raise InvalidUsage("Expected a configuration in 'config' field.")
    raw_config = body['config']
    if (not isinstance(raw_config, dict) or 'groups' not in raw_config
            or 'schedule' not in raw_config):
        raise InvalidUsage("Expected 'groups' and 'schedule' fields "
                           "in 'config'.")

    try:
        if body.get('date') is None:
            ref_date = date.today()
        else:
            ref_date = parse_date(body['date'])
    except SchemaError:
        raise InvalidUsage("Expected a date in field 'date' "
                           "with format YYYY-MM-DD.")

    try:
        config = build(raw_config['groups'], raw_config['schedule'])
    except SchemaError as ex:
        raise InvalidUsage('Could not validate configuration.',
                           payload={'fields': ex.autos})
    allow_overlap = flag(body, 'allow_overlap')
    try:
        warnings = raise_for_errors(validate(config, allow_overlap))
    except OverlapError as ex:
        raise InvalidUsage('Overlapping schedule windows.',
                           payload={
                               'findings': [finding_dict(f)
                                            for f in ex.findings]
                           })
    role = body.get('role', DEFAULT_ROLE)
    if not isinstance(role, str) or not role:
        raise InvalidUsage("Expected a role name in field 'role'.")
    return {
        'config': config,
        'date': ref_date,
        'warnings': warnings,
        'first_match': flag(body, 'first_match'),
        'payloads': flag(body, 'payloads'),
        'role': role
    }


def flag(body, field):
    """Reads an optional boolean field from the request body."""
    value = body.get(field, False)
    if not isinstance(value, bool):
        raise InvalidUsage(f"Expected true or false in field '{field}'.")
    return value


# Error handling template from
# https://flask.palletsprojects.com/en/1.1.x/patterns/apierrors/
class InvalidUsage(Exception):
    """Raised for resolution failures."""
    def __init__(self, message, status_code=400, payload=None):
        Exception.__init__(self)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        """Serializes the error."""
        rv = dict(self.payload or ())
        rv['error'] = self.message
        return rv


@app.errorhandler(InvalidUsage)
def handle_invalid_usage(error):
    """Handler for resolution failures."""
    response = jsonify(error.to_dict())
    response.status_code = error.status_code
    return response


if __name__ == '__main__':
    app.run(threaded=True, port=5000)

import json
import logging
import sys
import tomllib
from datetime import date
import click
from schema import SchemaError
from training_manager import (load_config, parse_date, validate,
                              raise_for_errors, resolve, assign,
                              format_result, role_payloads, AssignmentError,
                              AmbiguousAssignment, InvalidWindow,
                              MalformedDate, OverlapError,
                              UnknownGroupReference)
from training_manager.constants import (
    DEFAULT_ROLE, EXIT_AMBIGUOUS, EXIT_BAD_FILE, EXIT_INVALID_WINDOW,
    EXIT_MALFORMED_DATE, EXIT_OVERLAP, EXIT_UNKNOWN, EXIT_UNKNOWN_GROUP)

logger = logging.getLogger(__name__)

# Raised while reading or decoding a configuration file.
FILE_ERRORS = (OSError, tomllib.TOMLDecodeError, json.JSONDecodeError,
               UnicodeDecodeError)

# Most specific first.
EXIT_CODES = ((MalformedDate, EXIT_MALFORMED_DATE),
              (InvalidWindow, EXIT_INVALID_WINDOW),
              (UnknownGroupReference, EXIT_UNKNOWN_GROUP),
              (OverlapError, EXIT_OVERLAP),
              (AmbiguousAssignment, EXIT_AMBIGUOUS),
              (SchemaError, EXIT_BAD_FILE),
              (AssignmentError, EXIT_UNKNOWN),
              (FILE_ERRORS, EXIT_BAD_FILE))


def exit_code(ex: Exception) -> int:
    for kind, code in EXIT_CODES:
        if isinstance(ex, kind):
            return code
    return EXIT_UNKNOWN


def run(config_file, reference_date, first_match=False, allow_overlap=False,
        role=DEFAULT_ROLE, payloads=False):
    """Loads, validates, resolves and assigns; returns the output payload."""
    config = load_config(config_file)
    for warning in raise_for_errors(validate(config, allow_overlap)):
        logger.warning(warning.message)
    outcome = resolve(config, reference_date)
    logger.debug(f'Resolved {reference_date} to {outcome!r}.')
    result = assign(config, outcome, first_match=first_match)
    for warning in result.warnings:
        logger.warning(warning)
    out = format_result(result, reference_date)
    if payloads:
        out['payloads'] = role_payloads(config, result, role)
    return out


@click.command()
@click.argument('config_file', type=click.Path(dir_okay=False))
@click.option('--date', 'date_str', envvar='TRAINING_MANAGER_DATE',
              default=None, help='Reference date (YYYY-MM-DD); '
              'defaults to today.')
@click.option('--first-match', is_flag=True,
              help='Use the first on-duty group when several are on duty.')
@click.option('--allow-overlap', is_flag=True,
              help='Treat overlapping groups as a warning, not an error.')
@click.option('--role', envvar='TRAINING_MANAGER_ROLE', default=DEFAULT_ROLE,
              show_default=True, help='Role granted to the on-duty group.')
@click.option('--payloads', is_flag=True,
              help='Include per-group role update payloads.')
@click.option('--out-file', default=None, help='Write output here '
              'instead of standard output.')
@click.option('--verbose', '-v', is_flag=True)
def main(config_file, date_str, first_match, allow_overlap, role, payloads,
         out_file, verbose):
    """Resolves the group on duty for training in CONFIG_FILE."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(levelname)s: %(message)s')
    try:
        reference_date = (parse_date(date_str)
                          if date_str is not None else date.today())
        out = run(config_file, reference_date, first_match, allow_overlap,
                  role, payloads)
    except (SchemaError, AssignmentError) + FILE_ERRORS as ex:
        message = getattr(ex, 'message', None) or str(ex)
        click.echo(f'Error: {message}', err=True)
        sys.exit(exit_code(ex))

    if out_file:
        with open(out_file, 'w') as f:
            json.dump(out, f, indent=2)
    else:
        click.echo(json.dumps(out, indent=2))


if __name__ == '__main__':
    main()

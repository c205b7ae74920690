"""Constants that may be useful across submodules."""
DATE_FORMAT = '%Y-%m-%d'
DEFAULT_ROLE = 'training'

# Process exit codes, one per error kind.
EXIT_OK = 0
EXIT_UNKNOWN = 1
EXIT_USAGE = 2
EXIT_BAD_FILE = 3
EXIT_MALFORMED_DATE = 4
EXIT_INVALID_WINDOW = 5
EXIT_UNKNOWN_GROUP = 6
EXIT_OVERLAP = 7
EXIT_AMBIGUOUS = 8

"""
trajsim Validation Module

Validates simulation arguments and long-format tables.

Exports:
    - SimulationError: Base class of all trajsim errors
    - InvalidType: Unrecognized generator tag
    - MultipleTypesError: More than one generator tag in one call
    - MissingParameter: Required generator extra is absent
    - InvalidArgument: Argument present but unusable
    - validate_table: Check a long-format table covers its time grid
    - TableValidationError: Raised by validate_table(strict=True)
"""

from .arguments import (
    SimulationError,
    InvalidType,
    MultipleTypesError,
    MissingParameter,
    InvalidArgument,
    check_count,
    check_positive,
    check_non_negative,
    check_real,
    check_noises,
    check_extras,
)

from .table_validation import (
    validate_table,
    TableValidationError,
    TableValidationReport,
)

__all__ = [
    # Errors
    'SimulationError',
    'InvalidType',
    'MultipleTypesError',
    'MissingParameter',
    'InvalidArgument',
    # Argument checks
    'check_count',
    'check_positive',
    'check_non_negative',
    'check_real',
    'check_noises',
    'check_extras',
    # Table validation
    'validate_table',
    'TableValidationError',
    'TableValidationReport',
]

"""Validation framework for translation catalogs.

Provides the validator lifecycle, the built-in validators and the runner
that combines their outcomes into one severity.
"""

from __future__ import annotations

from transcheck.validators.base import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    BaseValidator,
    FileSet,
    Issue,
    Severity,
)
from transcheck.validators.duplicate_keys import DuplicateKeysValidator
from transcheck.validators.duplicate_values import DuplicateValuesValidator
from transcheck.validators.empty_values import EmptyValuesValidator
from transcheck.validators.encoding import EncodingValidator
from transcheck.validators.html_tags import HtmlTagValidator
from transcheck.validators.key_naming import KeyNamingConvention, KeyNamingConventionValidator
from transcheck.validators.mismatch import MismatchValidator
from transcheck.validators.placeholder_consistency import PlaceholderConsistencyValidator
from transcheck.validators.registry import (
    DEFAULT_VALIDATORS,
    VALIDATORS,
    UnknownValidatorError,
    resolve_validators,
)
from transcheck.validators.runner import (
    ValidationResult,
    ValidationRun,
    ValidationStatistics,
    ValidatorFileSetPair,
    create_file_sets,
)
from transcheck.validators.thresholds import KeyCountValidator, KeyDepthValidator
from transcheck.validators.xliff_schema import XliffSchemaValidator

__all__ = [
    # Base types
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "BaseValidator",
    "FileSet",
    "Issue",
    "Severity",
    # Validators
    "DuplicateKeysValidator",
    "DuplicateValuesValidator",
    "EmptyValuesValidator",
    "EncodingValidator",
    "HtmlTagValidator",
    "KeyCountValidator",
    "KeyDepthValidator",
    "KeyNamingConvention",
    "KeyNamingConventionValidator",
    "MismatchValidator",
    "PlaceholderConsistencyValidator",
    "XliffSchemaValidator",
    # Registry
    "DEFAULT_VALIDATORS",
    "VALIDATORS",
    "UnknownValidatorError",
    "resolve_validators",
    # Runner
    "ValidationResult",
    "ValidationRun",
    "ValidationStatistics",
    "ValidatorFileSetPair",
    "create_file_sets",
]

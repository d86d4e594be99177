"""Static registry of the built-in validators."""

from __future__ import annotations

from collections.abc import Iterable

from transcheck.validators.base import BaseValidator
from transcheck.validators.duplicate_keys import DuplicateKeysValidator
from transcheck.validators.duplicate_values import DuplicateValuesValidator
from transcheck.validators.empty_values import EmptyValuesValidator
from transcheck.validators.encoding import EncodingValidator
from transcheck.validators.html_tags import HtmlTagValidator
from transcheck.validators.key_naming import KeyNamingConventionValidator
from transcheck.validators.mismatch import MismatchValidator
from transcheck.validators.placeholder_consistency import PlaceholderConsistencyValidator
from transcheck.validators.thresholds import KeyCountValidator, KeyDepthValidator
from transcheck.validators.xliff_schema import XliffSchemaValidator

# Available validator classes, in execution order
VALIDATORS: dict[str, type[BaseValidator]] = {
    validator_class.name: validator_class
    for validator_class in (
        MismatchValidator,
        DuplicateKeysValidator,
        DuplicateValuesValidator,
        EmptyValuesValidator,
        PlaceholderConsistencyValidator,
        HtmlTagValidator,
        KeyNamingConventionValidator,
        KeyCountValidator,
        KeyDepthValidator,
        XliffSchemaValidator,
        EncodingValidator,
    )
}

DEFAULT_VALIDATORS = list(VALIDATORS)


class UnknownValidatorError(KeyError):
    """Raised when a validator name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown validator '{self.name}'. Available validators: {', '.join(VALIDATORS)}"


def get_validator_class(name: str) -> type[BaseValidator]:
    """Look up a validator class by registry name.

    Raises:
        UnknownValidatorError: If the name is not registered.
    """
    try:
        return VALIDATORS[name]
    except KeyError:
        raise UnknownValidatorError(name) from None


def resolve_validators(
    only: Iterable[str] | None = None,
    skip: Iterable[str] | None = None,
) -> list[type[BaseValidator]]:
    """Resolve the validator classes to run.

    Args:
        only: Run exactly these validators. Takes precedence over ``skip``.
        skip: Run every validator except these.

    Returns:
        Validator classes in registry order (``only`` keeps its own order).

    Raises:
        UnknownValidatorError: If any name is not registered.
    """
    only_names = list(only or [])
    skip_names = list(skip or [])

    if only_names:
        return [get_validator_class(name) for name in dict.fromkeys(only_names)]

    for name in skip_names:
        get_validator_class(name)
    return [VALIDATORS[name] for name in DEFAULT_VALIDATORS if name not in skip_names]

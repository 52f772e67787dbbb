"""Run every validation rule over a document and merge the results."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from specloader.document import OpenAPI
from specloader.validator.result import ValidationResult
from specloader.validator.rules import DEFAULT_RULES, Rule

logger = logging.getLogger(__name__)


class SpecValidator:
    """Aggregate of :class:`~specloader.validator.rules.Rule` instances.

    Args:
        rules: Rules to run, in order. Defaults to one instance of each
            class in :data:`~specloader.validator.rules.DEFAULT_RULES`.

    Example::

        result = SpecValidator().validate(document)
        for issue in result.errors:
            print(issue)
    """

    def __init__(self, rules: Optional[Sequence[Rule]] = None) -> None:
        self.rules: list[Rule] = (
            list(rules) if rules is not None else [cls() for cls in DEFAULT_RULES]
        )

    def validate(self, document: OpenAPI) -> ValidationResult:
        """Return the merged errors and warnings of every rule, in rule order."""
        result = ValidationResult()
        for rule in self.rules:
            partial = rule.validate(document)
            logger.debug(
                "Rule %s: %d error(s), %d warning(s)",
                rule.name, partial.error_count, partial.warning_count,
            )
            result.extend(partial)
        return result

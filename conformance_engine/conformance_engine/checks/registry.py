"""Registry of the conformance rules available to the engine.

Rules are keyed by :class:`CheckType` and returned in registration order,
which for the default engine is the order of the requirements they verify.
"""

from __future__ import annotations

import logging

from conformance_engine.checks.base import BaseCheck
from conformance_engine.checks.models import CheckType

logger = logging.getLogger(__name__)


class CheckRegistry:
    """Mapping of :class:`CheckType` to the :class:`BaseCheck` evaluating it."""

    def __init__(self) -> None:
        self._checks: dict[CheckType, BaseCheck] = {}

    def register(self, check: BaseCheck) -> None:
        """Register a rule.

        Raises
        ------
        ValueError
            If a rule with the same ``check_type`` is already registered.
        """
        if check.check_type in self._checks:
            raise ValueError(f"Check type {check.check_type.value} is already registered.")
        self._checks[check.check_type] = check
        logger.debug("Registered check %s (%s)", check.check_type.value, check.requirement)

    def unregister(self, check_type: CheckType) -> None:
        """Remove a rule from the registry.

        Raises
        ------
        KeyError
            If the check type is not registered.
        """
        if check_type not in self._checks:
            raise KeyError(f"Check type {check_type.value} is not registered.")
        del self._checks[check_type]

    def get(self, check_type: CheckType) -> BaseCheck | None:
        return self._checks.get(check_type)

    def get_all(self) -> list[BaseCheck]:
        """Return all registered rules in registration order."""
        return list(self._checks.values())

    def get_types(self) -> list[CheckType]:
        return list(self._checks)

    def __len__(self) -> int:
        return len(self._checks)

    def __contains__(self, check_type: CheckType) -> bool:
        return check_type in self._checks

"""Abstract base class for conformance check implementations.

All rules in the check engine must subclass :class:`BaseCheck`
and implement the :meth:`execute` method.
"""

from __future__ import annotations

import abc

from conformance_engine.checks.models import CheckContext, CheckResult, CheckType


class BaseCheck(abc.ABC):
    """Abstract base for all conformance rules.

    Subclasses must implement :attr:`check_type`, :attr:`requirement` and
    :meth:`execute`.  Rules are stateless; the store connection and options
    are passed via the :class:`CheckContext`.
    """

    @property
    @abc.abstractmethod
    def check_type(self) -> CheckType:
        """The rule this implementation evaluates."""

    @property
    @abc.abstractmethod
    def requirement(self) -> str:
        """The numbered OGC 12-128r12 requirement verified, e.g. ``"Requirement 5"``."""

    @property
    def description(self) -> str:
        """One-line summary shown by ``gpkg-check list``."""
        lines = (self.__doc__ or "").strip().splitlines()
        return lines[0] if lines else ""

    @abc.abstractmethod
    def execute(self, context: CheckContext) -> list[CheckResult]:
        """Run the check and return results.

        Parameters
        ----------
        context:
            The execution context holding the open store connection.

        Returns
        -------
        list[CheckResult]
            At least one result.  A rule that finds nothing wrong returns a
            single PASS result.

        Raises
        ------
        StoreQueryError
            If a query the rule depends on cannot be executed.
        """

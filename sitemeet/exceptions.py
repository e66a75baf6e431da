# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Domain errors raised by the permission and closure services."""


class SiteMeetError(Exception):
    """Base exception for all domain errors."""

    retryable = False


class ForbiddenError(SiteMeetError):
    """The actor may not perform the action.

    The message never says which role was missing.
    """

    def __init__(self, message: str = "You do not have permission to perform this action") -> None:
        super().__init__(message)


class NotFoundError(SiteMeetError):
    """An entity, target or user id does not resolve."""


class AlreadyClosedError(SiteMeetError):
    """The meeting or series has already been closed."""


class InvalidTargetError(SiteMeetError):
    """The chosen migration target cannot receive the open points."""


class PersistenceFailureError(SiteMeetError):
    """The store failed while applying a change; nothing was written."""

    retryable = True


class UnknownIdentifierError(SiteMeetError):
    """A stored role or action identifier is not part of the catalog."""

    def __init__(self, kind: str, value: object) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind}: {value!r}")

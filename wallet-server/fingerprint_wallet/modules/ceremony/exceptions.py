"""Ceremony domain specific exceptions."""


class CeremonyError(Exception):
    """Base class for registration/authentication ceremony errors."""


class DuplicateUserError(CeremonyError):
    """Raised when registering a username that already holds a credential."""


class UserNotFoundError(CeremonyError):
    """Raised when no credential is stored for the username."""


class NoPendingChallengeError(CeremonyError):
    """Raised when completing a ceremony without a live challenge."""


class CredentialMismatchError(CeremonyError):
    """Raised when the asserted credential id differs from the stored one."""

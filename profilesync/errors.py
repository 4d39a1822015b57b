"""Error taxonomy shared by the ingestion, storage and selection layers."""


class ProfileSyncError(Exception):
    """Base class for every error raised by the profile engine."""


class ParseError(ProfileSyncError):
    """CSV input was empty, malformed or produced no usable rows."""


class PersistenceError(ProfileSyncError):
    """A storage scope failed to read or write."""


class CorruptStateError(ProfileSyncError):
    """A stored blob could not be decoded back into records."""


class NotFoundError(ProfileSyncError):
    """A lookup or selection referenced a profile that does not exist."""


class FetchError(ProfileSyncError):
    """The remote CSV source could not be retrieved."""

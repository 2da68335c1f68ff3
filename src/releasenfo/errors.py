"""Exception types raised at the edges of the NFO generation run."""


class ReleaseNfoError(Exception):
    """Base exception for fatal conditions that abort a run."""

    pass


class InvalidInput(ReleaseNfoError):
    """A caller-supplied parameter is missing or malformed."""

    pass


class ExternalLookupFailure(ReleaseNfoError):
    """A remote metadata lookup failed or returned an unusable response."""

    pass


class ProbeFailure(ReleaseNfoError):
    """The media probe could not read the file or parse its output."""

    pass

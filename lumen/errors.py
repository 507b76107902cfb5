# lumen/errors.py
"""
Exception hierarchy.

FatalError subclasses abort the run with a nonzero exit status. Everything
else is caught at the smallest unit of work (one language, one backend) and
turned into a null result.
"""


class LumenError(Exception):
    """Base class for all generator errors."""


class FatalError(LumenError):
    """Aborts the whole run."""


class MissingCredentialError(FatalError):
    pass


class ConfigError(FatalError):
    """A setting (environment or command line) has an unusable value."""


class SourceFetchError(FatalError):
    pass


class CitationNotFoundError(FatalError):
    pass


class NoReflectionsError(FatalError):
    pass


class CitationParseError(LumenError, ValueError):
    """A citation string does not match the supported grammar."""


class UnknownBookError(CitationParseError):
    """The book token is not in the closed book vocabulary."""


class PassageFetchError(LumenError):
    pass


class ReflectionError(LumenError):
    pass

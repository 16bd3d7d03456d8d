"""Error taxonomy. Every error is terminal for the run that raised it."""


class BriefingError(Exception):
    """Base class; the message is safe to show to API callers."""


class UpstreamUnavailableError(BriefingError):
    """News source unreachable or answered with a non-2xx status."""


class NoContentError(BriefingError):
    """No fetched item had both a title and content."""


class SynthesisError(BriefingError):
    """Text-to-speech failed."""


class AssetMissingError(BriefingError):
    """A required font or the encoder binary is missing."""


class EncodeError(BriefingError):
    """The encoder exited with a non-zero status."""


class InvalidInputError(BriefingError, ValueError):
    """Malformed input to a planning step."""


class RunTimeoutError(BriefingError):
    """The run exceeded its wall-clock budget."""


class UploadError(BriefingError):
    """Publishing the finished video failed."""

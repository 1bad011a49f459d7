class HuffException(Exception):
    """Base class for every fatal error raised while compressing or decompressing."""


class FormatError(HuffException):
    """The input does not start with the expected 32-bit marker."""


class CorruptHeaderError(HuffException):
    """The tree header ended early or describes an impossible tree."""


class TruncatedBodyError(HuffException):
    """The compressed body ended before the end-of-stream code was read."""

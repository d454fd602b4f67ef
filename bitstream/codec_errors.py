#!/usr/bin/env python3


class CodecError(ValueError):
    pass


class DataError(CodecError):
    """Input cannot be modelled: empty, too large, or zero total frequency."""


class FormatError(CodecError):
    """Container header is short or carries the wrong magic."""


class TruncatedStreamWarning(UserWarning):
    pass

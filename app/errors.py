# app/errors.py
class CodeTypeError(Exception):
    """Base class for errors raised by CodeType."""


class ConfigError(CodeTypeError):
    pass

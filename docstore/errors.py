from __future__ import annotations


class DocStoreError(Exception):
    """Base class for every error raised by the document store."""


class KeyNotFound(DocStoreError, KeyError):
    def __init__(self, key: str):
        super().__init__(f'there is no key "{key}" in the database')
        self.key = key

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class TypeMismatch(DocStoreError, TypeError):
    """
    Raised when an operation meets a value of the wrong kind, e.g. `push` onto a number
    or `add` with a non-numeric amount.
    """


class PathNotCreatable(DocStoreError):
    def __init__(self, path: str, segment: str, reason: str):
        super().__init__(f"cannot write {path!r}: segment {segment!r} {reason}")
        self.path = path
        self.segment = segment


class PersistenceFailure(DocStoreError, OSError):
    """
    Reading or writing the backing file or a snapshot failed.

    The underlying exception is chained as __cause__.
    """



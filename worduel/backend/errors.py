"""Error taxonomy shared by the engine, store and HTTP layer."""

from __future__ import annotations


class WorduelError(Exception):
    """Base class for every failure surfaced to API callers."""

    code = "WorduelError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidState(WorduelError):
    code = "InvalidState"


class NotYourTurn(WorduelError):
    code = "NotYourTurn"


class InvalidWord(WorduelError):
    code = "InvalidWord"


class InvalidGuessFormat(WorduelError):
    code = "InvalidGuessFormat"


class InvalidConfig(WorduelError):
    code = "InvalidConfig"


class SelfInvite(WorduelError):
    code = "SelfInvite"


class DuplicatePending(WorduelError):
    code = "DuplicatePending"


class NotRecipient(WorduelError):
    code = "NotRecipient"


class NotFound(WorduelError):
    code = "NotFound"


class Conflict(WorduelError):
    """The record changed between read and write; re-read and retry."""

    code = "Conflict"

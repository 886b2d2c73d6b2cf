# errors that never reach the user verbatim

class PairingBotError(Exception):
    pass


class InputValidationError(PairingBotError):
    """Tokenizer rejected the raw command text."""


class StoreAccessError(PairingBotError):
    """get/upsert/merge/delete against the record store failed."""

    def __init__(self, op: str, cause: BaseException | None = None):
        self.op = op
        self.cause = cause
        msg = f"store {op} failed"
        if cause is not None:
            msg = f"{msg}: {cause!r}"
        super().__init__(msg)

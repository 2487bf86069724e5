# restobill/errors.py

"""
Error taxonomy shared by the catalog, billing, expense, credit and
aggregation functions. The HTTP layer maps each class to a status code
in restobill.main.
"""


class LedgerError(Exception):
    """Base class for every error raised by the ledger functions."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Malformed or out-of-range input (empty cart, negative amount, bad range)."""


class ReferenceNotFoundError(LedgerError):
    """A referenced id (item, bill, expense, credit customer) does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(LedgerError):
    """The store rejected or failed a read/write. The cause is chained."""

    def __init__(self, message: str, *, constraint_violation: bool = False):
        super().__init__(message)
        self.constraint_violation = constraint_violation

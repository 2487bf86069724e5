# restobill/clock.py

"""
Local wall-clock source.

Every "day" in the ledger is the restaurant's local calendar day, so bill
timestamps are naive local datetimes, never UTC. Callers that persist a
timestamp truncate it to seconds themselves.
"""

from datetime import date, datetime


def local_now() -> datetime:
    return datetime.now()


def local_today() -> date:
    return local_now().date()

"""
Shared enumerations for database models.

Python enums mapped to database enums ensure that only
valid values can be stored.
"""

import enum


class AccountType(str, enum.Enum):
    """Kind of money holder. Only CARD accounts accept installment plans."""
    CASH = "CASH"
    CARD = "CARD"
    FOREIGN_CURRENCY = "FOREIGN_CURRENCY"
    OTHER = "OTHER"


class Currency(str, enum.Enum):
    LOCAL = "LOCAL"
    FOREIGN = "FOREIGN"


class MovementType(str, enum.Enum):
    """Direction of a movement. A transfer is one of each."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

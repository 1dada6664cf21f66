"""Error types and event names of the budget module."""

from __future__ import annotations

EVENT_TYPE_BUDGET_COLLECTED = "budget_collected"

ATTRIBUTE_VALUE_NAME = "name"
ATTRIBUTE_VALUE_DESTINATION_ADDRESS = "destination_address"
ATTRIBUTE_VALUE_SOURCE_ADDRESS = "source_address"
ATTRIBUTE_VALUE_RATE = "rate"
ATTRIBUTE_VALUE_AMOUNT = "amount"


class BudgetError(Exception):
    """Base class of all budget module errors."""

    code: int = 1
    default_message: str = "budget error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0])

    def __str__(self) -> str:
        return self.message

    def wrap(self, message: str) -> "BudgetError":
        """Return an error of the same kind with ``message`` put in front."""
        return type(self)(f"{message}: {self.message}")


class InvalidBudgetNameError(BudgetError):
    code = 2
    default_message = (
        "budget name only allows letters, digits, and dash(-) without spaces "
        "and the maximum length is 50"
    )


class InvalidStartEndTimeError(BudgetError):
    code = 3
    default_message = "budget end time must be after the start time"


class InvalidBudgetRateError(BudgetError):
    code = 4
    default_message = "invalid budget rate"


class InvalidTotalBudgetRateError(BudgetError):
    code = 5
    default_message = "invalid total rate of the budgets with the same source address"


class DuplicateBudgetNameError(BudgetError):
    code = 6
    default_message = "duplicate budget name"


class InvalidAddressError(BudgetError):
    code = 7
    default_message = "invalid address"


class InvalidCoinsError(BudgetError):
    code = 10
    default_message = "invalid coins"


class InvalidRequestError(BudgetError):
    code = 18
    default_message = "invalid request"
"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def account_not_found(account_id: int) -> str:
    """Return message for missing bank account."""
    return f"Account {account_id} not found"


def card_not_found(card_id: int) -> str:
    """Return message for missing credit card."""
    return f"Card {card_id} not found"


def card_charge_not_found(charge_id: int) -> str:
    """Return message for missing card charge."""
    return f"Card charge {charge_id} not found"


def payment_not_found(payment_id: int) -> str:
    """Return message for missing scheduled payment."""
    return f"Scheduled payment {payment_id} not found"


def debtor_not_found(debtor_id: int) -> str:
    """Return message for missing debtor."""
    return f"Debtor {debtor_id} not found"


def investment_account_not_found(account_id: int) -> str:
    """Return message for missing investment account."""
    return f"Investment account {account_id} not found"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a name that is already taken."""
    return f"{kind} with name '{name}' already exists"


def insufficient_balance(account_name: str, balance, amount) -> str:
    """Return message when an account cannot cover a debit."""
    return (
        f"Insufficient balance in '{account_name}': "
        f"{balance:,.2f} available, {amount:,.2f} requested"
    )

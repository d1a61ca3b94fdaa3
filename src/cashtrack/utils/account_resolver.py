"""Utility for resolving account and card names to IDs."""

from cashtrack.domain.account import AccountService
from cashtrack.domain.card import CardService


def _resolve(value: str | int, get_by_id, list_all, kind: str) -> int:
    # If it's already an integer, use it as ID
    if isinstance(value, int):
        if get_by_id(value) is None:
            raise ValueError(f"{kind} ID {value} not found")
        return value

    # Try to parse as integer (handles string IDs like "1")
    try:
        item_id = int(value)
    except (ValueError, TypeError):
        item_id = None
    if item_id is not None:
        if get_by_id(item_id) is None:
            raise ValueError(f"{kind} ID {item_id} not found")
        return item_id

    # Try to find by name
    for item in list_all():
        if item.name == value:
            return item.id

    raise ValueError(f"{kind} '{value}' not found")


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve bank account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found
    """
    return _resolve(account, account_service.get_account, account_service.list_accounts, "Account")


def resolve_card(card_service: CardService, card: str | int) -> int:
    """Resolve credit card name or ID to card ID.

    Raises:
        ValueError: If card is not found
    """
    return _resolve(card, card_service.get_card, card_service.list_cards, "Card")

"""Investment holdings domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional

from cashtrack.database.base import Database
from cashtrack.domain.calculations import profit_loss, to_decimal
from cashtrack.domain.entities import (
    HoldingValuation,
    InvestmentAccount,
    InvestmentTransaction,
    TradeType,
)
from cashtrack.domain.errors import NotFoundError, ValidationError, investment_account_not_found
from cashtrack.domain.instruments import Instrument

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def apply_trade(
    quantity: Decimal, average_cost: Decimal, trade_type: TradeType, trade_quantity: Decimal, price: Decimal
) -> tuple[Decimal, Decimal]:
    """Position after a trade as (quantity, average cost).

    Buys re-weight the average cost; sells leave it unchanged.

    Raises:
        ValidationError: If a sell exceeds the held quantity
    """
    if trade_type == TradeType.BUY:
        new_quantity = quantity + trade_quantity
        total_cost = quantity * average_cost + trade_quantity * price
        return new_quantity, total_cost / new_quantity
    if trade_quantity > quantity:
        raise ValidationError(f"Insufficient quantity: {quantity:f} held, {trade_quantity:f} to sell")
    return quantity - trade_quantity, average_cost


def reverse_trade(
    quantity: Decimal, average_cost: Decimal, trade: InvestmentTransaction
) -> tuple[Decimal, Decimal]:
    """Position with ``trade`` undone as (quantity, average cost)."""
    if trade.trade_type == TradeType.SELL:
        return quantity + trade.quantity, average_cost

    new_quantity = quantity - trade.quantity
    if new_quantity <= 0:
        return ZERO, ZERO
    remaining_cost = quantity * average_cost - trade.total_amount
    if remaining_cost > 0:
        return new_quantity, remaining_cost / new_quantity
    return new_quantity, average_cost


class InvestmentService:
    """Service for investment accounts and their buys and sells."""

    def __init__(self, db: Database):
        """Initialize investment service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require(self, account_id: int) -> InvestmentAccount:
        account = self.db.get_investment_account(account_id)
        if account is None:
            raise NotFoundError(investment_account_not_found(account_id))
        return account

    def create_account(
        self,
        name: str,
        instrument: str,
        bank_name: Optional[str] = None,
        location: Optional[str] = None,
        is_physical: bool = False,
    ) -> int:
        """Create an empty investment account for a known instrument.

        Raises:
            ValidationError: If the instrument code is unknown
        """
        code = Instrument.from_code(instrument).code
        account_id = self.db.create_investment_account(
            name=name,
            instrument=code,
            bank_name=bank_name,
            location=location,
            is_physical=is_physical,
        )
        logger.info("Created investment account %s for %s (ID: %s)", name, code, account_id)
        return account_id

    def get_account(self, account_id: int) -> Optional[InvestmentAccount]:
        """Get investment account by ID."""
        return self.db.get_investment_account(account_id)

    def list_accounts(self) -> list[InvestmentAccount]:
        """List investment accounts."""
        return self.db.list_investment_accounts()

    def delete_account(self, account_id: int) -> None:
        """Delete an investment account and its history."""
        self._require(account_id)
        self.db.delete_investment_account(account_id)

    def record_trade(
        self,
        account_id: int,
        trade_type: TradeType | str,
        quantity,
        price_per_unit,
        transaction_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record a buy or sell and update the account's position.

        Returns:
            Investment transaction ID

        Raises:
            ValidationError: If quantity or price is not positive, or a sell
                exceeds the held quantity
            NotFoundError: If the account does not exist
        """
        account = self._require(account_id)
        try:
            trade_type = TradeType(trade_type)
        except ValueError as e:
            raise ValidationError(f"Trade type must be 'buy' or 'sell', got {trade_type!r}") from e
        quantity = to_decimal(quantity)
        price_per_unit = to_decimal(price_per_unit)
        if quantity <= 0 or price_per_unit <= 0:
            raise ValidationError("Quantity and price must be positive")

        new_quantity, new_average = apply_trade(
            account.quantity, account.average_cost, trade_type, quantity, price_per_unit
        )
        transaction_id = self.db.create_investment_transaction(
            account_id=account_id,
            trade_type=trade_type,
            quantity=quantity,
            price_per_unit=price_per_unit,
            total_amount=quantity * price_per_unit,
            transaction_date=transaction_date or date.today(),
            notes=notes,
        )
        self.db.update_investment_position(account_id, new_quantity, new_average)
        logger.info("Recorded %s of %s on investment account %s", trade_type.value, quantity, account.name)
        return transaction_id

    def delete_trade(self, transaction_id: int) -> None:
        """Delete a trade and undo its effect on the account's position."""
        trade = self.db.get_investment_transaction(transaction_id)
        if trade is None:
            raise NotFoundError(f"Investment transaction {transaction_id} not found")
        account = self._require(trade.account_id)

        new_quantity, new_average = reverse_trade(account.quantity, account.average_cost, trade)
        self.db.delete_investment_transaction(transaction_id)
        self.db.update_investment_position(account.id, new_quantity, new_average)

    def list_trades(
        self, account_id: Optional[int] = None, limit: Optional[int] = 50
    ) -> list[InvestmentTransaction]:
        """Most recent trades, newest first."""
        return self.db.list_investment_transactions(account_id=account_id, limit=limit)

    def instrument_codes(self) -> list[str]:
        """Distinct instrument codes held across accounts."""
        return sorted({acc.instrument for acc in self.db.list_investment_accounts()})

    def valuations(self, prices: Mapping[str, Optional[Decimal]]) -> list[HoldingValuation]:
        """Value every account at the given per-unit prices.

        Accounts whose instrument has no price are returned without a valuation.
        """
        results = []
        for account in self.db.list_investment_accounts():
            price = prices.get(account.instrument)
            valuation = None
            if price is not None:
                valuation = profit_loss(account.quantity, account.average_cost, price)
            results.append(HoldingValuation(account=account, price=price, valuation=valuation))
        return results

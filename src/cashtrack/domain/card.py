"""Credit card domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from cashtrack.database.base import Database
from cashtrack.domain.calculations import installment_details, to_decimal
from cashtrack.domain.entities import (
    CardCharge,
    CardOverview,
    CreditCard,
    InstallmentDetails,
)
from cashtrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    card_charge_not_found,
    card_not_found,
    duplicate_name,
)
from cashtrack.domain.obligations import (
    card_due_date,
    card_statement_date,
    period_debt,
    used_limit,
)
from cashtrack.domain.statement import validate_statement_day

logger = logging.getLogger(__name__)


class CardService:
    """Service for managing credit cards and their charges."""

    def __init__(self, db: Database):
        """Initialize card service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require(self, card_id: int) -> CreditCard:
        card = self.db.get_credit_card(card_id)
        if card is None:
            raise NotFoundError(card_not_found(card_id))
        return card

    def _require_charge(self, charge_id: int) -> CardCharge:
        charge = self.db.get_card_charge(charge_id)
        if charge is None:
            raise NotFoundError(card_charge_not_found(charge_id))
        return charge

    def _check_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        for card in self.db.list_credit_cards():
            if card.name == name and card.id != exclude_id:
                raise ConflictError(duplicate_name("Card", name))

    def create_card(
        self,
        name: str,
        statement_day: int,
        bank_name: Optional[str] = None,
        total_limit=Decimal("0"),
        currency: str = "TRY",
    ) -> int:
        """Create a credit card.

        Raises:
            ValidationError: If the statement day is not 1..31 or the limit is negative
            ConflictError: If the card name already exists
        """
        validate_statement_day(statement_day)
        total_limit = to_decimal(total_limit)
        if total_limit < 0:
            raise ValidationError("Card limit cannot be negative")
        self._check_name_free(name)

        card_id = self.db.create_credit_card(
            name=name,
            statement_day=statement_day,
            bank_name=bank_name,
            total_limit=total_limit,
            currency=currency.upper(),
        )
        logger.info("Created card %s (ID: %s)", name, card_id)
        return card_id

    def get_card(self, card_id: int) -> Optional[CreditCard]:
        """Get card by ID."""
        return self.db.get_credit_card(card_id)

    def list_cards(self) -> list[CreditCard]:
        """List all cards."""
        return self.db.list_credit_cards()

    def update_card(
        self,
        card_id: int,
        name: Optional[str] = None,
        bank_name: Optional[str] = None,
        total_limit=None,
        statement_day: Optional[int] = None,
        currency: Optional[str] = None,
    ) -> None:
        """Update card details."""
        self._require(card_id)
        if statement_day is not None:
            validate_statement_day(statement_day)
        if name is not None:
            self._check_name_free(name, exclude_id=card_id)
        self.db.update_credit_card(
            card_id,
            name=name,
            bank_name=bank_name,
            total_limit=to_decimal(total_limit) if total_limit is not None else None,
            statement_day=statement_day,
            currency=currency.upper() if currency else None,
        )

    def delete_card(self, card_id: int) -> None:
        """Delete a card together with all of its charges."""
        self._require(card_id)
        self.db.delete_credit_card(card_id)
        logger.info("Deleted card %s", card_id)

    def add_charge(
        self,
        card_id: int,
        description: str,
        amount,
        transaction_date: date,
        installments: int = 1,
    ) -> int:
        """Record a purchase on a card.

        Args:
            card_id: Card ID
            description: What was bought
            amount: Full purchase amount
            transaction_date: Purchase date
            installments: Number of monthly installments (1 for a single payment)

        Returns:
            Charge ID

        Raises:
            ValidationError: If the amount is not positive or installments < 1
            NotFoundError: If card not found
        """
        self._require(card_id)
        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationError("Charge amount must be positive")
        if installments < 1:
            raise ValidationError("Installments must be at least 1")

        return self.db.create_card_charge(
            card_id=card_id,
            description=description,
            amount=amount,
            transaction_date=transaction_date,
            installments=installments,
            current_installment=1,
        )

    def list_charges(self, card_id: int) -> list[CardCharge]:
        """List a card's charges, newest first."""
        self._require(card_id)
        return self.db.list_card_charges(card_id)

    def mark_charge_paid(self, charge_id: int) -> None:
        """Mark a charge as paid so it no longer counts toward the card's debt."""
        self._require_charge(charge_id)
        self.db.set_card_charge_paid(charge_id, True)

    def delete_charge(self, charge_id: int) -> None:
        """Delete a charge."""
        self._require_charge(charge_id)
        self.db.delete_card_charge(charge_id)

    def charge_installments(self, charge: CardCharge) -> Optional[InstallmentDetails]:
        """Installment progress for an installment charge, None for single payments."""
        if charge.installments <= 1:
            return None
        return installment_details(charge.amount, charge.installments, charge.current_installment)

    def overview(self, card: CreditCard, charges: list[CardCharge], today: date) -> CardOverview:
        """Derive the figures shown for a card from its charges."""
        used = used_limit(charges)
        return CardOverview(
            card=card,
            charges=tuple(charges),
            used_limit=used,
            available_limit=card.total_limit - used,
            period_debt=period_debt(charges),
            statement_date=card_statement_date(card.statement_day, charges, today),
            due_date=card_due_date(card.statement_day, charges, today),
        )

    def list_overviews(self, today: Optional[date] = None) -> list[CardOverview]:
        """Overview of every card."""
        today = today or date.today()
        return [
            self.overview(card, charges, today)
            for card, charges in self.db.list_cards_with_charges()
        ]

    def total_debt(self) -> Decimal:
        """Unpaid charges across all cards."""
        return sum(
            (used_limit(charges) for _, charges in self.db.list_cards_with_charges()),
            Decimal("0"),
        )

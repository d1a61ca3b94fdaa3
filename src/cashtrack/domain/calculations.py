"""Installment and profit/loss arithmetic."""

from decimal import Decimal

from cashtrack.domain.entities import InstallmentDetails, ProfitLoss

HUNDRED = Decimal("100")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Convert ints, floats and numeric strings to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def installment_details(total_amount, installment_count: int, current_installment: int) -> InstallmentDetails:
    """Split an installment purchase into paid and remaining parts.

    Args:
        total_amount: Full purchase amount
        installment_count: Number of installments (0 yields all-zero figures)
        current_installment: 1-based index of the installment now due

    Returns:
        InstallmentDetails for the purchase
    """
    total = to_decimal(total_amount)
    remaining_count = installment_count - current_installment + 1
    if installment_count == 0:
        return InstallmentDetails(
            monthly_payment=ZERO,
            remaining_count=remaining_count,
            remaining_total=ZERO,
            paid_total=ZERO,
            progress_percent=ZERO,
        )

    monthly_payment = total / installment_count
    return InstallmentDetails(
        monthly_payment=monthly_payment,
        remaining_count=remaining_count,
        remaining_total=monthly_payment * remaining_count,
        paid_total=monthly_payment * (current_installment - 1),
        progress_percent=Decimal(current_installment - 1) / installment_count * HUNDRED,
    )


def profit_loss(quantity, unit_cost, current_price) -> ProfitLoss:
    """Value a holding against its cost basis.

    The percentage is 0 when there is no cost basis to compare against.
    """
    quantity = to_decimal(quantity)
    total_cost = quantity * to_decimal(unit_cost)
    current_value = quantity * to_decimal(current_price)
    profit = current_value - total_cost
    profit_percent = profit / total_cost * HUNDRED if total_cost > 0 else ZERO
    return ProfitLoss(
        total_cost=total_cost,
        current_value=current_value,
        profit=profit,
        profit_percent=profit_percent,
        is_profit=profit >= 0,
    )

# =========================================================
# CHECKOUT COORDINATOR
#
# Turns a cart into one sale header, its items and the matching
# stock decrements. All three land in a single transaction on the
# caller's session, or none of them do.
# =========================================================

import enum
import logging
import time
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_api.core.config import settings
from pos_api.database import bound_lock_wait
from pos_api.core.exceptions import (
    InsufficientStockError,
    NotFoundError,
    PersistenceError,
    SaleError,
    SaleTimeoutError,
    ValidationError,
)
from pos_api.models.sales import Sale
from pos_api.services import inventory, sale_repository

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

# Money columns are Numeric(10, 2)
MAX_AMOUNT = Decimal("100000000")


def to_money(value) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"invalid amount: {value}") from None

    if not amount.is_finite():
        raise ValidationError(f"invalid amount: {value}")

    if abs(amount) >= MAX_AMOUNT:
        raise ValidationError("amount out of range")

    return amount


class SaleState(str, enum.Enum):
    VALIDATING = "validating"
    STOCK_CHECKING = "stock_checking"
    WRITING_HEADER = "writing_header"
    WRITING_ITEMS = "writing_items"
    ADJUSTING_INVENTORY = "adjusting_inventory"
    COMMITTED = "committed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)


@dataclass(frozen=True)
class SaleTotals:
    total: Decimal
    payment: Decimal
    balance: Decimal


def validate_cart(
    lines: Sequence[CartLine],
    payment_tendered,
    expected_total=None,
) -> SaleTotals:
    """Check the cart and work out total and balance.

    Runs before any database access. Underpayment is not rejected here:
    a negative balance is stored as-is and left to the till to refuse.
    """
    if not lines:
        raise ValidationError("empty sale")

    for line in lines:
        if line.quantity is None or line.quantity <= 0:
            raise ValidationError("non-positive quantity")
        if line.unit_price is None:
            raise ValidationError("missing price")
        price = to_money(line.unit_price)
        if price < 0:
            raise ValidationError("negative price")
        # Stored prices keep two decimals; anything finer would break the total
        if price != Decimal(str(line.unit_price)):
            raise ValidationError("sub-cent price")

    payment = to_money(payment_tendered)
    if payment < 0:
        raise ValidationError("negative payment")

    total = to_money(sum((line.line_total for line in lines), Decimal("0")))

    if expected_total is not None and to_money(expected_total) != total:
        raise ValidationError("total mismatch")

    return SaleTotals(total=total, payment=payment, balance=payment - total)


class _SaleRun:
    """Tracks one commit_sale call through its states against a deadline."""

    def __init__(self, timeout: float):
        self.state = SaleState.VALIDATING
        self.deadline = time.monotonic() + timeout

    def remaining(self) -> float:
        return self.deadline - time.monotonic()

    def check_deadline(self) -> None:
        if self.remaining() < 0:
            raise SaleTimeoutError(
                f"Sale did not complete within {settings.SALE_COMMIT_TIMEOUT_SECONDS}s"
            )

    def advance(self, state: SaleState) -> None:
        self.check_deadline()
        logger.debug(f"Sale {self.state.value} -> {state.value}")
        self.state = state


def commit_sale(
    db: Session,
    lines: Sequence[CartLine],
    payment_tendered,
    expected_total=None,
    cashier_id: int | None = None,
) -> int:
    run = _SaleRun(settings.SALE_COMMIT_TIMEOUT_SECONDS)
    totals = validate_cart(lines, payment_tendered, expected_total)

    requested = defaultdict(int)
    for line in lines:
        requested[line.product_id] += line.quantity

    try:
        run.advance(SaleState.STOCK_CHECKING)
        bound_lock_wait(db, run.remaining())

        for product_id, quantity in requested.items():
            available = inventory.read_stock(db, product_id)
            if quantity > available:
                raise InsufficientStockError(product_id, quantity, available)

        run.advance(SaleState.WRITING_HEADER)
        sale_id = sale_repository.insert_sale_header(
            db,
            total=totals.total,
            payment=totals.payment,
            balance=totals.balance,
            cashier_id=cashier_id,
        )

        run.advance(SaleState.WRITING_ITEMS)
        sale_repository.insert_sale_items(db, sale_id, lines)

        run.advance(SaleState.ADJUSTING_INVENTORY)
        for line in lines:
            inventory.decrement_stock(db, line.product_id, line.quantity)

        run.check_deadline()
        db.commit()
        run.state = SaleState.COMMITTED

    except PersistenceError as exc:
        db.rollback()
        logger.error(f"Sale rolled back during {run.state.value}: {exc.message}")
        run.state = SaleState.ABORTED
        raise

    except SaleError as exc:
        db.rollback()
        logger.warning(f"Sale aborted during {run.state.value}: {exc.message}")
        run.state = SaleState.ABORTED
        raise

    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Sale rolled back during {run.state.value}")
        run.state = SaleState.ABORTED
        if run.remaining() < 0:
            raise SaleTimeoutError(
                f"Sale did not complete within {settings.SALE_COMMIT_TIMEOUT_SECONDS}s"
            ) from exc
        raise PersistenceError("Unable to complete sale") from exc

    logger.info(
        f"Sale {sale_id} committed: {len(lines)} lines, "
        f"total {totals.total}, payment {totals.payment}"
    )

    return sale_id


def get_sale(db: Session, sale_id: int) -> Sale:
    try:
        sale = sale_repository.fetch_sale(db, sale_id)
    except SQLAlchemyError as exc:
        raise PersistenceError("Unable to load sale") from exc

    if sale is None:
        raise NotFoundError("sale", sale_id)

    return sale

"""Cart state management for user sessions."""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Any
from dataclasses import dataclass

logger = logging.getLogger(__name__)

FREE_SHIPPING_THRESHOLD = Decimal("120.000")
SHIPPING_FEE = Decimal("7.000")
FISCAL_STAMP = Decimal("1.000")
CURRENCY_LABEL = "DT"

MILLIMES = Decimal("0.001")


def round_amount(amount: Decimal) -> Decimal:
    """Round a dinar amount to millimes."""
    return Decimal(amount).quantize(MILLIMES, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, currency: str = CURRENCY_LABEL) -> str:
    """Format an amount for display, e.g. ``45.500 DT``."""
    return f"{round_amount(amount)} {currency}"


@dataclass
class CartItem:
    """Represents an item in the cart."""
    product_id: int
    product_name: str
    unit_price: Decimal
    quantity: int
    image_url: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        """Calculate subtotal for this cart item."""
        return self.unit_price * self.quantity


class Cart:
    """
    Shopping cart for one browsing session.

    Items are keyed by product id and keep insertion order. All totals are
    derived from the current items on every read.
    """

    def __init__(
        self,
        free_shipping_threshold: Decimal = FREE_SHIPPING_THRESHOLD,
        shipping_fee: Decimal = SHIPPING_FEE,
        fiscal_stamp: Decimal = FISCAL_STAMP,
        currency: str = CURRENCY_LABEL
    ):
        self.free_shipping_threshold = Decimal(free_shipping_threshold)
        self.flat_shipping_fee = Decimal(shipping_fee)
        self.fiscal_stamp = Decimal(fiscal_stamp)
        self.currency = currency
        self._items: Dict[int, CartItem] = {}

    @property
    def items(self) -> List[CartItem]:
        return list(self._items.values())

    def get_item(self, product_id: int) -> Optional[CartItem]:
        return self._items.get(product_id)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, product_id: int) -> bool:
        return product_id in self._items

    def add_item(self, product: Any, quantity: int = 1) -> Optional[CartItem]:
        """
        Add a product to the cart, or increase its quantity if already present.

        Price, name and image are snapshotted from the product the first time
        it is added. Non-positive quantities are ignored.

        Args:
            product: Object exposing ``id``, ``name``, ``price`` and ``image_url``
            quantity: Number of units to add

        Returns:
            The affected cart item, or None if nothing changed
        """
        if quantity <= 0:
            logger.debug("[CART] Ignoring add of product %s with quantity %s", product.id, quantity)
            return None

        item = self._items.get(product.id)
        if item is not None:
            item.quantity += quantity
            return item

        item = CartItem(
            product_id=product.id,
            product_name=product.name,
            unit_price=Decimal(product.price),
            quantity=quantity,
            image_url=getattr(product, "image_url", None)
        )
        self._items[product.id] = item
        return item

    def update_quantity(self, product_id: int, quantity: int) -> Optional[CartItem]:
        """
        Set the quantity of an item. A quantity of zero or less removes it.

        Unknown product ids are ignored.
        """
        item = self._items.get(product_id)
        if item is None:
            logger.debug("[CART] Product %s not in cart, update ignored", product_id)
            return None

        if quantity <= 0:
            del self._items[product_id]
            return None

        item.quantity = quantity
        return item

    def remove_item(self, product_id: int) -> bool:
        """Remove an item. Returns whether anything was removed."""
        return self._items.pop(product_id, None) is not None

    def clear(self):
        """Remove all items from the cart."""
        self._items.clear()

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    @property
    def subtotal(self) -> Decimal:
        # Full precision; rounding happens only when formatting
        return sum((item.subtotal for item in self._items.values()), Decimal("0"))

    @property
    def shipping_progress_percent(self) -> Decimal:
        """Progress towards free shipping, capped at 100."""
        if self.free_shipping_threshold <= 0:
            return Decimal("100")
        return min(Decimal("100"), self.subtotal / self.free_shipping_threshold * 100)

    @property
    def remaining_for_free_shipping(self) -> Decimal:
        return max(Decimal("0"), self.free_shipping_threshold - self.subtotal)

    @property
    def shipping_fee(self) -> Decimal:
        if self.subtotal >= self.free_shipping_threshold:
            return Decimal("0")
        return self.flat_shipping_fee

    @property
    def grand_total(self) -> Decimal:
        return self.subtotal + self.shipping_fee

    @property
    def checkout_total(self) -> Decimal:
        """Grand total plus the fiscal stamp charged on every order."""
        return self.grand_total + self.fiscal_stamp

    def summary(self) -> Dict[str, Any]:
        """
        Get formatted cart summary.

        Returns:
            Dictionary with items, totals and display strings
        """
        items = [
            {
                "product_id": item.product_id,
                "product_name": item.product_name,
                "quantity": item.quantity,
                "unit_price": float(item.unit_price),
                "subtotal": float(item.subtotal),
                "image_url": item.image_url
            }
            for item in self._items.values()
        ]

        return {
            "items": items,
            "item_count": self.item_count,
            "subtotal": float(self.subtotal),
            "subtotal_formatted": format_amount(self.subtotal, self.currency),
            "shipping_fee": float(self.shipping_fee),
            "shipping_fee_formatted": format_amount(self.shipping_fee, self.currency),
            "remaining_for_free_shipping": float(self.remaining_for_free_shipping),
            "remaining_for_free_shipping_formatted": format_amount(self.remaining_for_free_shipping, self.currency),
            "shipping_progress_percent": float(self.shipping_progress_percent),
            "free_shipping": self.shipping_fee == 0,
            "grand_total": float(self.grand_total),
            "grand_total_formatted": format_amount(self.grand_total, self.currency)
        }


class CartManager:
    """Holds one cart per user session."""

    def __init__(
        self,
        free_shipping_threshold: Decimal = FREE_SHIPPING_THRESHOLD,
        shipping_fee: Decimal = SHIPPING_FEE,
        fiscal_stamp: Decimal = FISCAL_STAMP,
        currency: str = CURRENCY_LABEL
    ):
        self._settings = dict(
            free_shipping_threshold=free_shipping_threshold,
            shipping_fee=shipping_fee,
            fiscal_stamp=fiscal_stamp,
            currency=currency
        )
        # session_id -> Cart
        self._carts: Dict[str, Cart] = {}

    def get_cart(self, session_id: str) -> Cart:
        """Return the session's cart, creating an empty one on first use."""
        cart = self._carts.get(session_id)
        if cart is None:
            cart = Cart(**self._settings)
            self._carts[session_id] = cart
        return cart

    def peek_cart(self, session_id: str) -> Cart:
        """Return the session's cart, or an empty cart that is not stored."""
        cart = self._carts.get(session_id)
        if cart is None:
            return Cart(**self._settings)
        return cart

    def discard(self, session_id: str):
        """Drop the session's cart when the session ends."""
        self._carts.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._carts)

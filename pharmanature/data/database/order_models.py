"""Order-related database models."""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pharmanature.data.database.connection import Base


class Order(Base):
    """Order model representing a checked-out cart."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(100), nullable=False, index=True)  # User session identifier

    # Customer details captured at checkout
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=False)
    address = Column(String(500), nullable=False)
    address2 = Column(String(500), nullable=True)
    postal_code = Column(String(20), nullable=False)
    city = Column(String(100), nullable=False)
    country = Column(String(100), default="Tunisia", nullable=False)
    payment_method = Column(String(10), nullable=False)  # cod, card

    # Amounts
    subtotal = Column(Numeric(10, 3), nullable=False)
    shipping_fee = Column(Numeric(10, 3), nullable=False)
    fiscal_stamp = Column(Numeric(10, 3), nullable=False)
    total_amount = Column(Numeric(10, 3), nullable=False)

    status = Column(String(50), default="pending", nullable=False)  # pending, shipped, delivered, cancelled
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Order(id={self.id}, session_id='{self.session_id}', total={self.total_amount}, status='{self.status}')>"


class OrderItem(Base):
    """Order item model representing individual products in an order."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id = Column(Integer, nullable=False)  # Snapshot, product may be gone later
    product_name = Column(String(255), nullable=False)  # Snapshot of product name at time of order
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 3), nullable=False)  # Snapshot of price at time of order
    subtotal = Column(Numeric(10, 3), nullable=False)  # quantity * unit_price

    # Relationships
    order = relationship("Order", back_populates="items")

    def __repr__(self):
        return f"<OrderItem(id={self.id}, product_id={self.product_id}, quantity={self.quantity}, subtotal={self.subtotal})>"

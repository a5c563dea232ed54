"""
FX deal model.
"""

from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Numeric, UniqueConstraint, func

from fxdeals.db.base import Base


class FxDeal(Base):
    """A single foreign-exchange deal, created once and never modified."""

    __tablename__ = "fx_deals"
    __table_args__ = (
        UniqueConstraint("deal_unique_id", name="uq_fx_deals_deal_unique_id"),
    )

    # SQLite only autoincrements INTEGER primary keys
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    deal_unique_id = Column(String(255), nullable=False)
    from_currency = Column(String(3), nullable=False, index=True)
    to_currency = Column(String(3), nullable=False, index=True)
    deal_timestamp = Column(DateTime, nullable=False, index=True)
    deal_amount = Column(Numeric(19, 4), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return (
            f"<FxDeal(deal_unique_id={self.deal_unique_id}, "
            f"pair={self.from_currency}/{self.to_currency}, amount={self.deal_amount})>"
        )

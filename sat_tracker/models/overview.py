"""Portfolio overview response model"""
from typing import Optional
from pydantic import BaseModel

class OverviewMetrics(BaseModel):
    """Portfolio rollups across exchange transactions and on-chain fees"""
    current_sats: int
    total_sats_stacked: int
    avg_buy_price: Optional[float] = None
    total_invested_cents: int
    avg_sell_price: Optional[float] = None
    fiat_extracted_cents: int
    total_sats_spent: int
    total_onchain_fees_paid_sats: int
    sats_stacked_7d: int
    usd_invested_7d_cents: int
    sats_stacked_31d: int
    usd_invested_31d_cents: int

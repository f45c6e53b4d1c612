import math
from datetime import date, timedelta

from riskdca.config import BacktestConfig, Cadence, InvestMode, LeapConfig, SellConfig
from riskdca.risk import PricePoint, timestamp_for
from riskdca.simulator import run_backtest
from riskdca.strategy import SizingStrategy

# Quarterly anchors, interpolated geometrically into a daily series.
anchors = [
    (date(2020, 1, 1), 7200), (date(2020, 7, 1), 11100), (date(2021, 1, 1), 33100),
    (date(2021, 7, 1), 41500), (date(2022, 1, 1), 38500), (date(2022, 7, 1), 23400),
    (date(2023, 1, 1), 23100), (date(2023, 7, 1), 29200), (date(2024, 1, 1), 43000),
    (date(2024, 7, 1), 65900), (date(2025, 1, 1), 105000), (date(2025, 7, 1), 88000),
    (date(2026, 1, 1), 102000),
]

prices = []
for (start, p0), (end, p1) in zip(anchors, anchors[1:]):
    days = (end - start).days
    for offset in range(days):
        frac = offset / days
        price = math.exp(math.log(p0) + (math.log(p1) - math.log(p0)) * frac)
        prices.append(PricePoint(timestamp=timestamp_for(start + timedelta(days=offset)), price=price))

config = BacktestConfig(
    mode=InvestMode.TIERED,
    base_amount=1000,
    cadence=Cadence.MONTHLY,
    anchor_day_of_month=13,
    start_date=date(2021, 6, 1),
    risk_band_index=4,
    sizing_strategy=SizingStrategy.EXPONENTIAL,
    risk_offset=-0.02,
    sell=SellConfig(enabled=True),
    leap=LeapConfig(enabled=True, cost_pct=0.35, delta=0.75),
)

result = run_backtest(prices, config)
stats = result.stats
for entry in result.ledger[:12]:
    print(entry.day, entry.label, entry.risk, round(entry.price, 2), entry.purchase_amount)
print("Invested:", round(stats.total_invested, 2))
print("Portfolio value:", round(stats.current_portfolio_value, 2))
print("Gain %:", round(stats.unrealized_gain_pct, 2))
print("LEAPs opened:", stats.leap_count, "realized P&L:", round(stats.leap_realized_pnl, 2))

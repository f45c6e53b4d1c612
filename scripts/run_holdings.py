from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

import yaml

from riskdca.holdings import Holding, HoldingsAggregator, PlannedHolding
from riskdca.logging import configure_logging
from riskdca.prices import load_price_series
from riskdca.risk import AssetClass
from riskdca.strategy import SizingStrategy


def _load_holdings(path: Path) -> tuple[list[Holding], list[PlannedHolding], dict[str, Path]]:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    holdings: list[Holding] = []
    planned: list[PlannedHolding] = []
    price_files: dict[str, Path] = {}
    for item in data.get("holdings", []):
        ticker = str(item["ticker"]).upper()
        kwargs = {
            "ticker": ticker,
            "shares": float(item["shares"]),
            "entry_price": float(item["entry_price"]),
            "asset_class": AssetClass(item.get("asset_class", "stock")),
        }
        if item.get("planned", False):
            planned.append(PlannedHolding(**kwargs))
        else:
            holdings.append(Holding(**kwargs))
        price_files[ticker] = path.parent / item["prices"]
    return holdings, planned, price_files


def main() -> None:
    parser = argparse.ArgumentParser(description="Value holdings and suggest risk-based actions.")
    parser.add_argument("--holdings", required=True, help="YAML list of holdings with price file paths")
    parser.add_argument("--strategy", default="linear", choices=[s.value for s in SizingStrategy])
    parser.add_argument("--output", required=True)
    args = parser.parse_args()

    configure_logging()
    holdings, planned, price_files = _load_holdings(Path(args.holdings))
    histories = {ticker: load_price_series(file) for ticker, file in price_files.items()}

    aggregator = HoldingsAggregator(sizing_strategy=SizingStrategy(args.strategy))
    summary = aggregator.aggregate(holdings, histories, planned=planned)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(asdict(summary), indent=2, default=str), encoding="utf-8")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()

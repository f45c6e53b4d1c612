from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional, Sequence

from riskdca.config import load_config
from riskdca.logging import configure_logging
from riskdca.prices import load_price_series
from riskdca.report import build_report
from riskdca.simulator import run_backtest


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Backtest a risk-weighted DCA strategy on a daily price file.")
    parser.add_argument("--config", required=True, help="YAML backtest config")
    parser.add_argument("--prices", required=True, help="CSV with date/timestamp and price/close columns")
    parser.add_argument("--output", required=True, help="Where to write the JSON report")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--json-logs", action="store_true")
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, format_json=args.json_logs)

    config = load_config(args.config)
    prices = load_price_series(args.prices)
    result = run_backtest(prices, config)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    report = build_report(result, config, source=str(args.prices))
    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()

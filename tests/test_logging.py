import structlog
from structlog.testing import capture_logs

from riskdca.config import BacktestConfig, InvestMode
from riskdca.logging import configure_logging, get_logger
from riskdca.risk import ScoredPricePoint
from riskdca.simulator import SimulationEngine


def test_configure_logging_accepts_both_renderers():
    configure_logging(level="DEBUG", format_json=True)
    get_logger("riskdca.test").info("json_event", answer=42)
    configure_logging(level="INFO", format_json=False, include_timestamp=False)
    get_logger("riskdca.test").info("console_event")
    structlog.reset_defaults()


def test_engine_emits_completion_event():
    series = [ScoredPricePoint(1_704_067_200_000, 100.0, 100.0, 0.3)]
    with capture_logs() as events:
        SimulationEngine(BacktestConfig(mode=InvestMode.EQUAL_AMOUNT)).run(series, frozenset({0}))

    completed = [event for event in events if event["event"] == "simulation_complete"]
    assert len(completed) == 1
    assert completed[0]["days"] == 1

"""Application configuration: run mode, symbols, data, strategies, risk and feed settings."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class RunMode(Enum):
    """How the engine is run."""

    BACKTEST = "BACKTEST"
    LIVE_TRADING = "LIVE_TRADING"
    SHADOW = "SHADOW"
    OPTIMIZATION = "OPTIMIZATION"
    WALK_FORWARD = "WALK_FORWARD"
    MONTE_CARLO = "MONTE_CARLO"


def run_mode_to_string(mode: RunMode) -> str:
    """Return the configuration name of ``mode``."""
    return mode.value


def run_mode_from_string(name: str) -> RunMode:
    """Parse a run mode name; unknown names fall back to BACKTEST."""
    try:
        return RunMode(name)
    except ValueError:
        return RunMode.BACKTEST


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_object(value: Any) -> bool:
    return isinstance(value, dict)


@dataclass
class DataConfig:
    """Where market data comes from and which dates to use."""

    start_date: str = ""
    end_date: str = ""
    trade_data_dir: str = "data"
    book_data_dir: str = "data"
    historical_data_fallback_dir: str = "historical_data"


@dataclass
class StrategyParams:
    """Tunable strategy parameters."""

    lookback_levels: int = 10
    imbalance_threshold: float = 1.5


@dataclass
class StrategyConfig:
    """One configured strategy."""

    name: str = ""
    symbol: str = ""
    active: bool = True
    params: StrategyParams = field(default_factory=StrategyParams)


@dataclass
class WebSocketConfig:
    """Live feed endpoint."""

    host: str = "stream.binance.com"
    port: int = 9443
    target: str = "/ws"


@dataclass
class RiskConfig:
    """Risk limits."""

    risk_per_trade_pct: float = 0.01
    max_drawdown_pct: float = 0.05


def _copy_fields(target: Any, source: dict, checks: dict) -> None:
    """Copy each key of ``checks`` from ``source`` to ``target`` if its type check passes."""
    for key, check in checks.items():
        if key in source and check(source[key]):
            value = source[key]
            setattr(target, key, float(value) if check is _is_number else value)


def _parse_strategy(data: dict) -> StrategyConfig:
    strategy = StrategyConfig()
    _copy_fields(strategy, data, {"name": _is_string, "symbol": _is_string, "active": _is_bool})
    params = data.get("params")
    if _is_object(params):
        _copy_fields(
            strategy.params,
            params,
            {"lookback_levels": _is_integer, "imbalance_threshold": _is_number},
        )
    return strategy


@dataclass
class AppConfig:
    """The complete application configuration."""

    run_mode: RunMode = RunMode.BACKTEST
    symbols: list[str] = field(default_factory=list)
    initial_capital: float = 100000.0
    data: DataConfig = field(default_factory=DataConfig)
    strategies: list[StrategyConfig] = field(default_factory=list)
    risk: RiskConfig = field(default_factory=RiskConfig)
    websocket: WebSocketConfig = field(default_factory=WebSocketConfig)

    @classmethod
    def from_dict(cls, data: Any) -> AppConfig:
        """Build a configuration from parsed JSON, ignoring missing or mistyped fields."""
        config = cls()
        if not _is_object(data):
            return config

        mode = data.get("run_mode")
        if _is_string(mode):
            config.run_mode = run_mode_from_string(mode)

        symbols = data.get("symbols")
        if isinstance(symbols, list):
            config.symbols = [s for s in symbols if _is_string(s)]
        elif _is_string(symbols):
            config.symbols = [symbols]

        capital = data.get("initial_capital")
        if _is_number(capital):
            config.initial_capital = float(capital)

        section = data.get("data")
        if _is_object(section):
            _copy_fields(
                config.data,
                section,
                {
                    "start_date": _is_string,
                    "end_date": _is_string,
                    "trade_data_dir": _is_string,
                    "book_data_dir": _is_string,
                    "historical_data_fallback_dir": _is_string,
                },
            )

        strategies = data.get("strategies")
        if isinstance(strategies, list):
            config.strategies = [_parse_strategy(s) for s in strategies if _is_object(s)]

        section = data.get("websocket")
        if _is_object(section):
            _copy_fields(
                config.websocket,
                section,
                {"host": _is_string, "port": _is_integer, "target": _is_string},
            )

        section = data.get("risk")
        if _is_object(section):
            _copy_fields(
                config.risk,
                section,
                {"risk_per_trade_pct": _is_number, "max_drawdown_pct": _is_number},
            )

        legacy = data.get("strategy")
        if not config.strategies and _is_string(legacy):
            symbol = config.symbols[0] if config.symbols else ""
            config.strategies.append(StrategyConfig(name=legacy, symbol=symbol))

        return config

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a JSON-ready dictionary."""
        return {
            "run_mode": run_mode_to_string(self.run_mode),
            "symbols": list(self.symbols),
            "initial_capital": self.initial_capital,
            "data": {
                "start_date": self.data.start_date,
                "end_date": self.data.end_date,
                "trade_data_dir": self.data.trade_data_dir,
                "book_data_dir": self.data.book_data_dir,
                "historical_data_fallback_dir": self.data.historical_data_fallback_dir,
            },
            "strategies": [
                {
                    "name": s.name,
                    "symbol": s.symbol,
                    "active": s.active,
                    "params": {
                        "lookback_levels": s.params.lookback_levels,
                        "imbalance_threshold": s.params.imbalance_threshold,
                    },
                }
                for s in self.strategies
            ],
            "websocket": {
                "host": self.websocket.host,
                "port": self.websocket.port,
                "target": self.websocket.target,
            },
            "risk": {
                "risk_per_trade_pct": self.risk.risk_per_trade_pct,
                "max_drawdown_pct": self.risk.max_drawdown_pct,
            },
        }

    @classmethod
    def load_from_file(cls, filename: PathLike) -> AppConfig:
        """Load a JSON configuration; an unreadable or invalid file yields the defaults."""
        try:
            with open(filename, encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            logger.error("JSON parsing error: %s", exc)
            return cls()
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error loading configuration: could not open config file %s: %s", filename, exc)
            return cls()
        return cls.from_dict(data)

    def save_to_file(self, filename: PathLike) -> None:
        """Write the configuration as indented JSON with sorted keys."""
        text = json.dumps(self.to_dict(), indent=4, sort_keys=True)
        try:
            with open(filename, "w", encoding="utf-8") as handle:
                handle.write(text + "\n")
        except OSError as exc:
            logger.error("Error saving configuration: %s", exc)
            raise
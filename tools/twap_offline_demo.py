#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from twap_oracle.errors import WindowNotElapsedError
from twap_oracle.integration import ConsumerGuard, WindowOracle, load_config
from twap_oracle.kernels.python.uq112x112 import Q112, decode
from twap_oracle.state import ConstantProductPair

OWNER = "operator"
START_TIMESTAMP = 1_700_000_000


class SimulatedClock:
    def __init__(self, start: int) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


def _fmt_q112(value: int) -> str:
    frac = ((value % Q112) * 10**6) >> 112
    return f"{decode(value)}.{frac:06d}"


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Offline windowed TWAP demo against an in-memory pair.")
    p.add_argument("--config", type=Path, default=None, help="YAML oracle config")
    p.add_argument("--window", type=int, default=None, help="window size in seconds (overrides config)")
    p.add_argument("--steps", type=int, default=3, help="number of windows to simulate")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = load_config(args.config)
    window = args.window if args.window is not None else config.window_size_seconds

    clock = SimulatedClock(START_TIMESTAMP)
    pair = ConstantProductPair(token0="WETH", token1="USDC", reserve0=1_000, reserve1=2_000_000, timestamp=clock.now)
    oracle = WindowOracle(pair, window, OWNER, clock=clock)
    guard = ConsumerGuard(oracle, config)

    try:
        oracle.update()
        print("[twap-demo] FAIL: update accepted before the window closed")
        return 1
    except WindowNotElapsedError as exc:
        print(f"[twap-demo] update before window closed rejected: {exc}")

    for i in range(max(0, args.steps)):
        clock.advance(window // 2)
        out = pair.swap_exact_in(10, zero_for_one=True, now=clock.now)
        r0, r1, _ = pair.get_reserves()
        print(f"[twap-demo] step={i} swapped 10 WETH -> {out} USDC, reserves=({r0}, {r1})")
        clock.advance(window - window // 2)
        oracle.update()
        print(
            f"[twap-demo] step={i} price0={_fmt_q112(oracle.price0())} "
            f"price1={_fmt_q112(oracle.price1())} 1 WETH={guard.convert0to1(1)} USDC"
        )

    print(f"[twap-demo] state: {oracle.snapshot()}")
    print("[twap-demo] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Command that generates a plan for a sample building and reports its size."""

from __future__ import annotations

import argparse
import time
from typing import Optional, Sequence

from .buildings import create_request
from .planning import generate_plan


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="insulplan", description="Generate an insulation plan for a sample building."
    )
    parser.add_argument("--request-id", type=int, default=1)
    parser.add_argument("--length", type=float, default=0.5)
    parser.add_argument("--height", type=float, default=2.0)
    parser.add_argument("--width", type=float, default=0.1)
    parser.add_argument("--velocity", type=float, default=1.0)
    args = parser.parse_args(argv)

    try:
        plan_request = create_request(
            args.request_id, args.length, args.height, args.width, args.velocity
        )
    except ValueError as error:
        parser.error(str(error))

    start = time.perf_counter()
    plan = generate_plan(plan_request)
    elapsed = time.perf_counter() - start
    print(f"Elapsed: {elapsed:.5f}s")

    tiles = len(plan.tiles.triangulated_tiles.tiles)
    adhesive = len(plan.tiles.triangulated_adhesive.tiles)
    print(f"tiles: {tiles} adhesive: {adhesive}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
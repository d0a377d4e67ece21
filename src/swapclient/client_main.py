from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from swapclient.domain.errors import SwapClientError
from swapclient.envs.client_env import get_settings
from swapclient.infrastructure.swap_server.swap_server_client import SwapServerClient

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Query swap server terms and quotes."
    )
    parser.add_argument(
        "--amount",
        type=int,
        default=None,
        help="Also fetch Loop Out / Loop In quotes for this amount (sat)",
    )
    parser.add_argument(
        "--publication-delay",
        type=int,
        default=30,
        help="Minutes until the Loop Out swap publication deadline (default: 30)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


async def run(amount: Optional[int], publication_delay: int) -> None:
    settings = get_settings()
    async with SwapServerClient.from_settings(settings) as client:
        out_terms = await client.get_loop_out_terms()
        in_terms = await client.get_loop_in_terms()
        print(
            f"Loop Out: min {out_terms.min_swap_amount} sat, "
            f"max {out_terms.max_swap_amount} sat"
        )
        print(
            f"Loop In:  min {in_terms.min_swap_amount} sat, "
            f"max {in_terms.max_swap_amount} sat"
        )
        if amount is None:
            return

        deadline = datetime.now(timezone.utc) + timedelta(minutes=publication_delay)
        out_quote = await client.get_loop_out_quote(amount, deadline)
        in_quote = await client.get_loop_in_quote(amount)
        print(
            f"Loop Out quote: fee {out_quote.swap_fee} sat, "
            f"prepay {out_quote.prepay_amount} sat, "
            f"cltv delta {out_quote.cltv_delta}, "
            f"dest {out_quote.swap_payment_dest.hex()}"
        )
        print(
            f"Loop In quote:  fee {in_quote.swap_fee} sat, "
            f"cltv delta {in_quote.cltv_delta}"
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(run(args.amount, args.publication_delay))
    except (SwapClientError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

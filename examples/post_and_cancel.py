"""Post, inspect and cancel an order on the SX Bet testnet.

This example walks a maker order through its lifecycle:
- Create and sign an order at ladder-valid odds
- Post it and read it back from the order book
- Cancel it with a signed cancellation

Prerequisites:
1. pip install sx-bet-sdk[examples]
2. Set PRIVATE_KEY and MARKET_HASH (in the environment or a .env file)
3. Approve the token transfer proxy for USDC on Toronto

Usage:
    python post_and_cancel.py
"""

import asyncio
import os
from dotenv import load_dotenv

load_dotenv()


async def main():
    from eth_account import Account

    from sx_bet_sdk import (
        TESTNET,
        SXBetAPIError,
        SXBetRouter,
        build_cancel,
        create_order,
        format_odds,
        format_order_for_taker,
        hash_order,
        parse_usdc,
        snap_to_odds_ladder,
    )

    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    MARKET_HASH = os.environ.get("MARKET_HASH")

    missing = [var for var in ("PRIVATE_KEY", "MARKET_HASH") if not os.environ.get(var)]
    if missing:
        print(f"Missing required environment variables: {', '.join(missing)}")
        return

    maker = Account.from_key(PRIVATE_KEY).address

    print("=" * 60)
    print("  SX BET ORDER LIFECYCLE (TORONTO TESTNET)")
    print("=" * 60)
    print(f"    Maker: {maker}")

    async with SXBetRouter({"exchange": TESTNET}) as router:
        try:
            # 52.4% snaps to the nearest 0.25% step
            print("\n[1] Creating order...")
            order = create_order(
                market_hash=MARKET_HASH,
                is_maker_betting_outcome_one=True,
                total_bet_size=parse_usdc("5"),
                percentage_odds=snap_to_odds_ladder(0.524),
                maker=maker,
                private_key=PRIVATE_KEY,
                config=TESTNET,
            )
            order_hash = hash_order(order)
            odds = format_odds(order.percentage_odds)
            print(f"    Hash: {order_hash}")
            print(f"    Odds: {odds['implied_percentage']} ({odds['decimal_odds']})")

            print("\n[2] Posting order...")
            await router.post_orders([order])

            print("\n[3] Reading the book as a taker...")
            active = await router.get_active_orders(maker=maker, market_hashes=[MARKET_HASH])
            for item in active:
                view = format_order_for_taker(item)
                print(
                    f"    Outcome {view['outcome']} at {view['impliedOddsFormatted']}, "
                    f"up to {view['availableBetSize']} USDC"
                )

            print("\n[4] Cancelling order...")
            cancel = build_cancel(
                order_hashes=[order_hash],
                maker=maker,
                private_key=PRIVATE_KEY,
                config=TESTNET,
            )
            result = await router.cancel_orders(cancel)
            print(f"    Cancelled: {result}")

        except SXBetAPIError as e:
            print(f"\nAPI error ({e.status_code}): {e.body}")
            raise


if __name__ == "__main__":
    asyncio.run(main())

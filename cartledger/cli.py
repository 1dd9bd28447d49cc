"""
Command Line Interface

    cart [--ledger PATH] add SKU QUANTITY DESCRIPTION PRICE CURRENCY
    cart [--ledger PATH] remove SKU QUANTITY
    cart [--ledger PATH] view [--detail]
    cart [--ledger PATH] init
    cart help

Options go before the action. Everything after the action is passed
through as-is, so a DESCRIPTION may start with "-".

Answers go to stdout, structured logs to stderr. A ledger that cannot be
opened ends the process with status 1. Rejected operations print the
reason and still exit 0.
"""

import argparse
from pathlib import Path
from typing import Optional, Sequence

from cartledger.audit import configure_logging
from cartledger.config import get_settings
from cartledger.exceptions import CartError, StorageError
from cartledger.models.entry import REPORTING_CURRENCY, quantize_money
from cartledger.orchestrator import Cart, create_cart
from cartledger.services.storage import init_ledger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cart",
        description="Append-only shopping cart ledger",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--ledger",
        type=Path,
        default=None,
        help="Ledger file to use instead of CART_LEDGER_PATH",
    )
    parser.add_argument(
        "--detail",
        action="store_true",
        help="With view: print remaining stock per SKU",
    )
    parser.add_argument("action", nargs="?", default="")
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser


def print_usage(cart: Cart) -> None:
    print("Usage: ")
    for action, arguments in cart.get_help().items():
        print(f"   {action} {arguments}")


def print_total(cart: Cart) -> None:
    print(f"Current cart total: {quantize_money(cart.total())}")


def print_detail(cart: Cart) -> None:
    summary = cart.summary()
    for item in summary.skus:
        print(
            f"   {item.sku}: {item.quantity} left, "
            f"{quantize_money(item.value)} {summary.currency.value}"
        )


def run_action(cart: Cart, action: str, args: Sequence[str], detail: bool = False) -> None:
    """Dispatch one action against a loaded cart."""
    if action == "add":
        if len(args) != 5:
            print(f"Usage: {action} {cart.get_help()[action]}")
            return
        sku, quantity, description, price, currency = args
        try:
            cart.add_to_cart(sku, description, quantity, price, currency)
        except CartError as e:
            print(f"Error: {e}")
            return
        print(f"Entry by SKU '{sku}' successfully added")
        print_total(cart)
    
    elif action == "remove":
        if len(args) != 2:
            print(f"Usage: {action} {cart.get_help()[action]}")
            return
        sku, quantity = args
        try:
            cart.remove_from_cart(sku, quantity)
        except CartError as e:
            print(f"Error: {e}")
            return
        print(f"Entry by SKU '{sku}' successfully removed")
        print_total(cart)
    
    elif action == "view":
        print_total(cart)
        if detail or "--detail" in args:
            print_detail(cart)
    
    else:
        print_usage(cart)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    
    args = build_parser().parse_args(argv)
    ledger_path = args.ledger or settings.ledger_path
    
    if args.action == "init":
        try:
            created = init_ledger(ledger_path)
        except StorageError as e:
            print(f"Error: {e}")
            return 1
        if created:
            print(f"Created empty ledger at {ledger_path} ({REPORTING_CURRENCY.value})")
        else:
            print(f"Ledger already exists at {ledger_path}")
        return 0
    
    try:
        cart = create_cart(settings, ledger_path=ledger_path)
    except StorageError as e:
        print(f"Error: {e}")
        return 1
    
    run_action(cart, args.action, args.args, detail=args.detail)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

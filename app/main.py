"""
Cart Ledger launcher

Runs the command-line interface once the package is installed
(pip install -e .):

    python app/main.py add SKU QUANTITY DESCRIPTION PRICE CURRENCY

The installed `cart` script is equivalent.
"""

from cartledger.cli import main


if __name__ == "__main__":
    raise SystemExit(main())

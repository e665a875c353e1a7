"""Storefront state management CLI.

Inspects and resets the local JSON state the storefront keeps between runs.

Usage:
    python src/manage.py show-state     # Print every saved key
    python src/manage.py seed-state     # Fill missing keys with the seed data
    python src/manage.py reset-state    # Delete all saved state
"""

import argparse
import json
import sys
from pathlib import Path


def _open_store(state_dir):
    from storefront.persistence.state_store import JsonStateStore
    from storefront.utils.settings import Settings

    return JsonStateStore(Path(state_dir) if state_dir else Settings.from_env().state_dir)


def reset_state(state_dir=None):
    """Delete every saved state key."""
    store = _open_store(state_dir)
    print(f"Clearing state in {store.directory}...")
    store.clear()
    print("Done.")


def seed_state(state_dir=None):
    """Load the storefront once, which writes seed data for any missing key."""
    from storefront.application.storefront import Storefront
    from storefront.domain import storefront
    from storefront.utils.settings import Settings

    store = _open_store(state_dir)

    print("Initializing storefront domain...")
    storefront.init()
    with storefront.domain_context():
        controller = Storefront(store, settings=Settings.from_env())
        controller.load()
        print(f"  {len(controller.products())} products, {len(controller.ledger.newest_first())} orders.")

    print("Done.")


def show_state(state_dir=None):
    """Print every saved state key as JSON."""
    store = _open_store(state_dir)
    keys = store.keys()
    if not keys:
        print(f"No saved state in {store.directory}.")
        return

    for key in keys:
        print(f"--- {key}")
        print(json.dumps(store.load(key), ensure_ascii=False, indent=2))


def main():
    parser = argparse.ArgumentParser(description="Storefront state management")
    parser.add_argument(
        "--state-dir",
        help="Directory holding the saved state (default: $STOREFRONT_STATE_DIR or .storefront)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("show-state", help="Print every saved state key")
    subparsers.add_parser("seed-state", help="Write seed data for missing state keys")
    subparsers.add_parser("reset-state", help="Delete all saved state")

    args = parser.parse_args()

    if args.command == "show-state":
        show_state(args.state_dir)
    elif args.command == "seed-state":
        seed_state(args.state_dir)
    elif args.command == "reset-state":
        reset_state(args.state_dir)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

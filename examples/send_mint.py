#!/usr/bin/env python3
"""
Relay a mint transaction with the sequence-tx package.

This example shows how to:
1. Load and validate a config file
2. Plug in a smart-wallet backend
3. Relay the mint and print the receipt
"""
import os
import sys

from sequence_tx import SequenceTxError, load_config
from sequence_tx.backends import load_wallet_factory
from sequence_tx.cli import StepError, run


def main():
    config_path = os.environ.get("SEQUENCE_CONFIG", "config.json")

    try:
        cfg = load_config(config_path)
        factory = load_wallet_factory(cfg.resolved_wallet_factory)
    except SequenceTxError as e:
        print(f"ERROR: {e}")
        return 1

    try:
        receipt = run(cfg, wallet_factory=factory)
    except StepError as e:
        print(f"ERROR ({e.kind.value if e.kind else 'UNKNOWN'}): {e}")
        return 1

    print(f"Status: {'Success' if receipt.status == 1 else 'Failed'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

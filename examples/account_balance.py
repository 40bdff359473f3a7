"""
Stub every Account's balance for the length of a block.

Run:
    python examples/account_balance.py
"""

from anystub import setup_logging
from anystub.testing import any_instance_scope


class Account:
    def balance(self):
        return 100


if __name__ == "__main__":
    setup_logging(level="DEBUG")

    with any_instance_scope() as stubs:
        stubs.stub(Account, "balance")
        stubs.mock_for(Account).on("balance", returns=42)
        print("stubbed:", Account().balance())

    print("restored:", Account().balance())

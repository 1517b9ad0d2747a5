"""Quickstart: pick a constructor overload from runtime arguments.

Declare overloads with ``typing.overload`` and let overwire choose the most
specific one for the values you actually have.
"""

from __future__ import annotations

from typing_extensions import overload

from overwire import OverloadBridge


class Money:
    @overload
    def __init__(self, amount: int) -> None: ...

    @overload
    def __init__(self, amount: int, currency: str) -> None: ...

    @overload
    def __init__(self, amount: float, currency: str) -> None: ...

    def __init__(self, amount: float, currency: str = "EUR") -> None:
        self.amount = amount
        self.currency = currency


def main() -> None:
    bridge = OverloadBridge()

    print(bridge.resolve_constructor(Money, [10]))  # => Money(int)
    print(bridge.resolve_constructor(Money, [2.5, "GBP"]))  # => Money(float, str)

    money = bridge.construct(Money, [10, "USD"])
    print(f"amount={money.amount} currency={money.currency}")  # => amount=10 currency=USD


if __name__ == "__main__":
    main()

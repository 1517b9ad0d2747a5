"""Method overloads.

``call_method`` applies the same selection rules to methods, static methods
and class methods.
"""

from __future__ import annotations

from typing import Any

from typing_extensions import overload

from overwire import OverloadBridge


class Animal:
    pass


class Dog(Animal):
    pass


class Describer:
    @overload
    def describe(self, value: Animal) -> str: ...

    @overload
    def describe(self, value: object) -> str: ...

    @overload
    def describe(self, value: Dog) -> str: ...

    def describe(self, value: Any) -> str:
        if isinstance(value, Dog):
            return "dog"
        if isinstance(value, Animal):
            return "animal"
        return "something"

    @staticmethod
    def shout(text: str) -> str:
        return text.upper()


def main() -> None:
    bridge = OverloadBridge()
    describer = Describer()

    print(bridge.call_method(describer, "describe", [Dog()]))  # => dog
    print(bridge.call_method(describer, "describe", [Animal()]))  # => animal
    print(bridge.call_method(describer, "describe", [42]))  # => something
    print(bridge.call_method(describer, "shout", ["hi"]))  # => HI


if __name__ == "__main__":
    main()

"""Errors and troubleshooting.

Resolution problems are reported as typed errors and never guessed around.
Failures inside the selected constructor keep their original cause.
"""

from __future__ import annotations

from typing_extensions import overload

from overwire import (
    OverloadBridge,
    OverwireAmbiguousOverloadError,
    OverwireInvocationError,
    OverwireNoApplicableOverloadError,
)


class Pair:
    @overload
    def __init__(self, left: int, right: object) -> None: ...

    @overload
    def __init__(self, left: object, right: int) -> None: ...

    def __init__(self, left: object, right: object) -> None:
        self.left = left
        self.right = right


class Temperature:
    def __init__(self, kelvin: float) -> None:
        if kelvin < 0:
            msg = "below absolute zero"
            raise ValueError(msg)
        self.kelvin = kelvin


def main() -> None:
    bridge = OverloadBridge()

    try:
        bridge.construct(Pair, [1, 2])
    except OverwireAmbiguousOverloadError as error:
        print(f"ambiguous_candidates={len(error.candidates)}")  # => ambiguous_candidates=2

    try:
        bridge.construct(Temperature, ["warm"])
    except OverwireNoApplicableOverloadError as error:
        print(error)  # => There's no public Temperature overload with a parameter list compatible with (str).

    try:
        bridge.construct(Temperature, [-1.0])
    except OverwireInvocationError as error:
        print(f"cause={error.cause!r}")  # => cause=ValueError('below absolute zero')


if __name__ == "__main__":
    main()

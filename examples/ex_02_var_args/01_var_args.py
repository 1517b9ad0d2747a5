"""Variable-arity overloads.

Fixed-arity overloads are tried first. Only when none applies are ``*args``
overloads considered, and the trailing arguments are packed into one slot.
"""

from __future__ import annotations

from typing_extensions import overload

from overwire import OverloadBridge, pack_arguments


class UrlPath:
    @overload
    def __init__(self, root: str) -> None: ...

    @overload
    def __init__(self, root: str, *parts: str) -> None: ...

    def __init__(self, root: str, *parts: str) -> None:
        self.segments = (root, *parts)


def main() -> None:
    bridge = OverloadBridge()

    print(bridge.resolve_constructor(UrlPath, ["usr"]))  # => UrlPath(str)

    variadic = bridge.resolve_constructor(UrlPath, ["usr", "lib", "python"])
    print(variadic)  # => UrlPath(str, *str)
    print(pack_arguments(variadic, ["usr", "lib", "python"]))  # => ('usr', ['lib', 'python'])

    path = bridge.construct(UrlPath, ["usr", "local", "bin"])
    print("/".join(path.segments))  # => usr/local/bin


if __name__ == "__main__":
    main()

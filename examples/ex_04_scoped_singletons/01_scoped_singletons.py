"""Scoped singletons.

Equal settings share one write-protected instance per scope. Instances are
held weakly, so the cache forgets them once nothing else uses them.
"""

from __future__ import annotations

import gc
from dataclasses import dataclass

from overwire import ScopedSingletonCache


@dataclass(frozen=True)
class RendererSettings:
    strict: bool = False


@dataclass(frozen=True)
class Renderer:
    settings: RendererSettings


def main() -> None:
    cache: ScopedSingletonCache[RendererSettings, Renderer] = ScopedSingletonCache()

    first = cache.get_or_create("app", RendererSettings(strict=True), Renderer)
    second = cache.get_or_create("app", RendererSettings(strict=True), Renderer)
    other_scope = cache.get_or_create("plugin", RendererSettings(strict=True), Renderer)

    print(f"same_scope_shared={first is second}")  # => same_scope_shared=True
    print(f"cross_scope_shared={first is other_scope}")  # => cross_scope_shared=False
    print(f"live_entries={len(cache)}")  # => live_entries=2

    del first, second, other_scope
    gc.collect()
    print(f"purged={cache.purge()}")  # => purged=2


if __name__ == "__main__":
    main()

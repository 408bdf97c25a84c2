"""Resolve import specifiers to file addresses."""

from __future__ import annotations

import posixpath
from collections.abc import Collection, Iterable

_INDEX = "index"


def is_relative(specifier: str) -> bool:
    return specifier.startswith("./") or specifier.startswith("../") or specifier in (".", "..")


def resolve_module_address(
    importer: str,
    specifier: str,
    known: Collection[str],
    extensions: Iterable[str] = (),
) -> str:
    """Resolve ``specifier`` as imported from ``importer``.

    Relative specifiers are joined with the importer's directory and matched
    against ``known`` addresses, trying in order: the path itself, the path
    plus each extension, ``<path>/index`` plus each extension, and the path
    with its extension swapped (``./a.js`` for ``a.ts``). Bare package
    specifiers, and relative ones that match nothing, are returned as
    written or normalized so callers can report them.
    """
    if not is_relative(specifier):
        return specifier

    base = posixpath.normpath(posixpath.join(posixpath.dirname(importer), specifier))
    extensions = list(extensions)

    if base in known:
        return base
    for ext in extensions:
        if base + ext in known:
            return base + ext
    for ext in ("", *extensions):
        candidate = posixpath.join(base, _INDEX + ext)
        if candidate in known:
            return candidate

    stem, ext = posixpath.splitext(base)
    if ext:
        for other in extensions:
            if stem + other in known:
                return stem + other
    return base

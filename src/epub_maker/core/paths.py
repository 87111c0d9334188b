"""Resolve archive-internal paths."""


def normalize_path(path: str) -> str:
    """Collapse ``.`` and ``..`` segments of a forward-slash path.

    A ``..`` with nothing left to pop is dropped, so ``../a`` becomes ``a``.
    No check is made that the result stays inside the archive root.
    """
    parts: list[str] = []
    for part in path.split("/"):
        if part == "..":
            if parts:
                parts.pop()
        elif part and part != ".":
            parts.append(part)
    return "/".join(parts)


def parent_dir(path: str) -> str:
    """Return the directory holding ``path`` (empty string at the root)."""
    if "/" not in path:
        return ""
    return path.rsplit("/", 1)[0]


def resolve_href(base_dir: str, href: str) -> str:
    """Resolve ``href`` relative to ``base_dir`` inside the archive."""
    return normalize_path(f"{base_dir}/{href}")

import fnmatch
import os


def relative_to(path: str, root: str | None) -> str:
    """Return path relative to root with forward slashes, or path unchanged."""
    if not root:
        return path
    rel = os.path.relpath(path, root)
    if rel.startswith(".."):
        return path
    return rel.replace(os.sep, "/")


def is_excluded(path: str, patterns: list[str], root: str | None = None) -> bool:
    """Return True if path matches any exclude pattern.

    Supports:
    - fnmatch globs on the root-relative path: "modules/contrib/*"
    - fnmatch globs on the basename: "*.min.js", "*.tpl.php"
    - Directory names/prefixes: "vendor/", "tests" (matches any file within that tree)
    """
    filename = relative_to(path, root)
    for pattern in patterns:
        if fnmatch.fnmatch(filename, pattern):
            return True
        if fnmatch.fnmatch(filename.rsplit("/", 1)[-1], pattern):
            return True
        prefix = pattern.rstrip("/") + "/"
        if filename.startswith(prefix) or ("/" + prefix) in filename:
            return True
    return False

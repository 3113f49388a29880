"""Module manifest (``go.mod``) parser."""

from __future__ import annotations

from repo_snapshot.model.report import ModuleManifest

_MODULE = "module"
_REQUIRE = "require"


def _keyword_rest(line: str, keyword: str) -> str | None:
    """Text after *keyword* when *line* starts with it as a whole word."""
    if line == keyword:
        return ""
    if line.startswith(keyword) and line[len(keyword)] in " \t(":
        return line[len(keyword):].strip()
    return None


def _dependency(line: str) -> str | None:
    line = line.split("//", 1)[0].strip()
    if not line:
        return None
    return line.split()[0]


def parse_manifest(text: str, rel_path: str) -> ModuleManifest:
    """Extract the module identifier and the required module paths.

    Handles both ``require x v1`` lines and parenthesized ``require ( ... )``
    blocks.  Comment lines and blank lines inside a block are skipped.
    """
    module = ""
    requires: list[str] = []
    in_block = False

    for raw in text.splitlines():
        line = raw.strip()
        if in_block:
            if line.startswith(")"):
                in_block = False
                continue
            dep = _dependency(line)
            if dep:
                requires.append(dep)
            continue

        if not module:
            rest = _keyword_rest(line, _MODULE)
            if rest is not None:
                module = rest.split("//", 1)[0].strip().strip('"')
                continue

        rest = _keyword_rest(line, _REQUIRE)
        if rest is None:
            continue
        if rest.startswith("("):
            inner = rest[1:].strip()
            if inner.endswith(")"):
                # require ( x v1 ) on a single line
                dep = _dependency(inner[:-1])
                if dep:
                    requires.append(dep)
            else:
                in_block = True
                dep = _dependency(inner)
                if dep:
                    requires.append(dep)
            continue
        dep = _dependency(rest)
        if dep:
            requires.append(dep)

    return ModuleManifest(path=rel_path, module=module, requires=tuple(requires))

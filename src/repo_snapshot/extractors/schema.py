"""Protocol schema (``.proto``) parser."""

from __future__ import annotations

from repo_snapshot.model.report import SchemaFile


def _after(line: str, keyword: str) -> str | None:
    if line.startswith(keyword + " "):
        return line[len(keyword):].strip()
    return None


def parse_schema(text: str, rel_path: str) -> SchemaFile:
    package = ""
    services: list[str] = []
    rpcs: list[str] = []

    for raw in text.splitlines():
        line = raw.strip()
        rest = _after(line, "package")
        if rest is not None:
            if rest.endswith(";"):
                rest = rest[:-1]
            package = rest.strip()
            continue
        rest = _after(line, "service")
        if rest is not None:
            services.append(rest.split("{", 1)[0].strip())
            continue
        rest = _after(line, "rpc")
        if rest is not None:
            rpcs.append(rest.split("(", 1)[0].strip())

    return SchemaFile(
        path=rel_path,
        package=package,
        services=tuple(services),
        rpcs=tuple(rpcs),
    )

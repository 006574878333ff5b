#!/usr/bin/env python3
"""Link existence check for SUMMARY.md -> documentation pages.

Every markdown link `[label](target)` in the index is checked against the
filesystem, relative to the documentation root. Targets are taken literally.
Exit code 1 if any referenced path is missing.
"""
from __future__ import annotations
import argparse
import pathlib
import re
import sys
import typing as t

SUMMARY_NAME = "SUMMARY.md"
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


class LinkRef(t.NamedTuple):
    line: int
    label: str
    target: str


class LinkReport(t.NamedTuple):
    links: list[LinkRef]
    valid: list[LinkRef]
    invalid: list[LinkRef]

    @property
    def passed(self) -> bool:
        return not self.invalid


def extract_links(text: str) -> list[LinkRef]:
    links: list[LinkRef] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        for m in LINK_RE.finditer(line):
            links.append(LinkRef(lineno, m.group(1), m.group(2)))
    return links


def read_raw(path: pathlib.Path) -> str:
    """Read text without newline translation, so \\r is kept."""
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()


def target_exists(root: pathlib.Path, target: str) -> bool:
    try:
        return (root / target).exists()
    except OSError:
        # e.g. ENAMETOOLONG, EACCES
        return False


def check_index_links(root: pathlib.Path | str, index: str = SUMMARY_NAME) -> LinkReport:
    root = pathlib.Path(root)
    links = extract_links(read_raw(root / index))
    valid: list[LinkRef] = []
    invalid: list[LinkRef] = []
    for link in links:
        if target_exists(root, link.target):
            valid.append(link)
        else:
            invalid.append(link)
    return LinkReport(links, valid, invalid)


def print_report(report: LinkReport, indent: str = "") -> None:
    missing = set(report.invalid)
    for link in report.links:
        if link in missing:
            print(f"{indent}FAIL {link.target} (missing)")
        else:
            print(f"{indent}OK   {link.target}")
    print(f"{indent}Link summary: {len(report.valid)}/{len(report.links)} links are valid")
    if report.invalid:
        print(f"{indent}Missing files:")
        for link in report.invalid:
            print(f"{indent}  - Line {link.line}: {link.target}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("root", nargs="?", default=".", help="documentation root")
    parser.add_argument("--index", default=SUMMARY_NAME, help="index document, relative to root")
    args = parser.parse_args(argv)
    try:
        report = check_index_links(args.root, args.index)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read {args.index}: {e}")
        return 1
    print_report(report)
    if not report.passed:
        return 1
    print(f'Link check passed: {len(report.links)} links verified.')
    return 0

if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())

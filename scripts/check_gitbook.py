#!/usr/bin/env python3
"""Check that the GitBook documentation tree is complete and consistent.

Checks, in order:
- config:    .gitbook.yaml exists and has root / structure.readme / structure.summary
- files:     README.md and SUMMARY.md exist
- summary:   every [label](target) in SUMMARY.md points at an existing path
- structure: the expected section directories exist (markdown count is informational)
- readme:    README.md has a heading, a link and more than 100 characters

Each check reports its own failures and never aborts the run. Exit code 1 if
any check fails.
"""
from __future__ import annotations
import argparse
import pathlib
import sys
import typing as t

from check_links import SUMMARY_NAME, check_index_links, print_report, read_raw
from gitbook_config import CONFIG_NAME, ConfigMalformed, ConfigMissing, load_config

README_NAME = "README.md"
REQUIRED_FILES = (README_NAME, SUMMARY_NAME)
EXPECTED_DIRS = ("architecture", "developers", "contracts", "examples", "support")
MIN_README_LENGTH = 100
RULE = "-" * 26

NEXT_STEPS = [
    "You can publish to GitBook by connecting your repository",
    "Alternatively, use tools like @gitbook/cli for local building",
    "Consider adding GitHub Actions for automated documentation deployment",
]

# Problem kinds
CONFIG_MISSING = "ConfigMissing"
CONFIG_MALFORMED = "ConfigMalformed"
FILE_MISSING = "FileMissing"
LINK_TARGET_MISSING = "LinkTargetMissing"
DIRECTORY_MISSING = "DirectoryMissing"
CONTENT_INSUFFICIENT = "ContentInsufficient"


class Problem(t.NamedTuple):
    kind: str
    item: str


class CheckResult(t.NamedTuple):
    name: str
    passed: bool
    problems: tuple[Problem, ...] = ()

    @classmethod
    def from_problems(cls, name: str, problems: list[Problem]) -> "CheckResult":
        return cls(name, not problems, tuple(problems))


def _mark(ok: bool) -> str:
    return "OK  " if ok else "FAIL"


def check_config(root: pathlib.Path) -> CheckResult:
    print(f"1. GitBook configuration ({CONFIG_NAME})")
    try:
        config = load_config(root)
    except ConfigMissing as e:
        print(f"   FAIL configuration check failed: {e}\n")
        return CheckResult.from_problems("config", [Problem(CONFIG_MISSING, CONFIG_NAME)])
    except (ConfigMalformed, OSError, UnicodeDecodeError) as e:
        print(f"   FAIL configuration check failed: {e}\n")
        return CheckResult.from_problems("config", [Problem(CONFIG_MALFORMED, str(e))])
    print("   OK   GitBook configuration is valid")
    print(f"   Root:    {config.root}")
    print(f"   README:  {config.structure.readme}")
    print(f"   Summary: {config.structure.summary}")
    print(f"   Format:  {config.effective_format}\n")
    return CheckResult("config", True)


def check_required_files(root: pathlib.Path, files: t.Sequence[str] = REQUIRED_FILES) -> CheckResult:
    print("2. Required files")
    problems: list[Problem] = []
    for name in files:
        if (root / name).exists():
            print(f"   OK   {name} exists")
        else:
            print(f"   FAIL {name} missing")
            problems.append(Problem(FILE_MISSING, name))
    print()
    return CheckResult.from_problems("files", problems)


def check_summary(root: pathlib.Path, index: str = SUMMARY_NAME) -> CheckResult:
    print(f"3. {index} structure and links")
    try:
        report = check_index_links(root, index)
    except (OSError, UnicodeDecodeError) as e:
        print(f"   FAIL {index} check failed: {e}\n")
        return CheckResult.from_problems("summary", [Problem(FILE_MISSING, index)])
    print_report(report, indent="   ")
    print()
    problems = [Problem(LINK_TARGET_MISSING, f"line {link.line}: {link.target}")
                for link in report.invalid]
    return CheckResult.from_problems("summary", problems)


def count_markdown(directory: pathlib.Path) -> int | None:
    """Number of *.md files directly inside directory, or None if unreadable."""
    try:
        return sum(1 for p in directory.iterdir() if p.is_file() and p.suffix == ".md")
    except OSError:
        return None


def check_directories(root: pathlib.Path, dirs: t.Sequence[str] = EXPECTED_DIRS) -> CheckResult:
    print("4. Directory structure")
    problems: list[Problem] = []
    for name in dirs:
        path = root / name
        if path.is_dir():
            count = count_markdown(path)
            shown = "unknown number of" if count is None else count
            print(f"   OK   {name}/ ({shown} files)")
        else:
            print(f"   FAIL {name}/ missing")
            problems.append(Problem(DIRECTORY_MISSING, name))
    print()
    return CheckResult.from_problems("structure", problems)


def check_readme(root: pathlib.Path, readme: str = README_NAME,
                 min_length: int = MIN_README_LENGTH) -> CheckResult:
    print(f"5. {readme} content")
    try:
        text = read_raw(root / readme)
    except (OSError, UnicodeDecodeError) as e:
        print(f"   FAIL {readme} check failed: {e}\n")
        return CheckResult.from_problems("readme", [Problem(FILE_MISSING, readme)])

    has_title = "# " in text
    has_links = "[" in text and "]" in text
    has_body = len(text) > min_length
    print(f"   {_mark(has_title)} Has main title")
    print(f"   {_mark(has_links)} Contains links")
    print(f"   {_mark(has_body)} Has substantial content ({len(text)} chars)\n")

    problems: list[Problem] = []
    if not has_title:
        problems.append(Problem(CONTENT_INSUFFICIENT, f"{readme}: no heading"))
    if not has_links:
        problems.append(Problem(CONTENT_INSUFFICIENT, f"{readme}: no links"))
    if not has_body:
        problems.append(Problem(CONTENT_INSUFFICIENT,
                                f"{readme}: {len(text)} chars, need more than {min_length}"))
    return CheckResult.from_problems("readme", problems)


def run_all_checks(root: pathlib.Path | str) -> dict[str, CheckResult]:
    root = pathlib.Path(root)
    results = [
        check_config(root),
        check_required_files(root),
        check_summary(root),
        check_directories(root),
        check_readme(root),
    ]
    return {r.name: r for r in results}


def all_passed(results: dict[str, CheckResult]) -> bool:
    return all(r.passed for r in results.values())


def print_summary(results: dict[str, CheckResult]) -> None:
    print("Test results summary:")
    print(RULE)
    for name, result in results.items():
        print(f"{_mark(result.passed)} {name.capitalize()} check")
    passed = all_passed(results)
    print(RULE)
    print(f"Overall status: {'PASSED' if passed else 'FAILED'}")
    if passed:
        print("\nGitBook integration is properly configured and ready to use!")
        print("\nNext steps:")
        for step in NEXT_STEPS:
            print(f"   - {step}")
    else:
        print("\nPlease fix the failing checks before using GitBook integration.")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("root", nargs="?", default=".", help="documentation root")
    args = parser.parse_args(argv)
    print("Starting GitBook integration checks\n")
    results = run_all_checks(args.root)
    print_summary(results)
    return 0 if all_passed(results) else 1

if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())

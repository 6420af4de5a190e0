#!/usr/bin/env python3
"""
i18n check for the Streamlit UI.

Two checks:
- Hardcoded, user-visible string literals passed to `st.*` calls in `src/ui/`
  and `app.py` that are not wrapped with `t(...)`.
- String tables in `src/ui/i18n.py` missing keys that the English table has.

Ignore a line with an inline `# no-i18n` or `# i18n-ok` comment. Emoji-only
literals are ignored.

Exit code is 0 unless `--enforce` (or env `I18N_ENFORCE=1`) is given and
issues are found.
"""
from __future__ import annotations

import argparse
import ast
import os
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

UI_FUNCS: set[str] = {
    "title", "header", "subheader", "markdown", "write", "caption",
    "info", "warning", "error", "success", "toast",
    "button", "text", "selectbox", "radio",
}

RELEVANT_KWARGS: set[str] = {"label", "help", "placeholder", "caption", "title", "text"}

IGNORE_COMMENTS: tuple[str, ...] = ("no-i18n", "i18n-ok")


def is_emoji_only(s: str) -> bool:
    return not any(ch.isalpha() for ch in s)


def is_st_call(node: ast.Call) -> bool:
    func = node.func
    if not isinstance(func, ast.Attribute) or func.attr not in UI_FUNCS:
        return False
    root = func.value
    while isinstance(root, ast.Attribute):
        root = root.value
    return isinstance(root, ast.Name) and root.id == "st"


def literal_text(node: ast.AST) -> str | None:
    """Return literal text for str constants and f-strings, None otherwise."""
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    if isinstance(node, ast.JoinedStr):
        return "".join(
            v.value for v in node.values
            if isinstance(v, ast.Constant) and isinstance(v.value, str)
        )
    return None


def scan_file(path: Path) -> List[Tuple[int, str]]:
    """Return (lineno, message) for hardcoded UI strings in a file."""
    src = path.read_text(encoding="utf-8")
    try:
        tree = ast.parse(src, filename=str(path))
    except SyntaxError as e:
        return [(e.lineno or 0, f"SyntaxError parsing file: {e}")]

    lines = src.splitlines()
    issues: List[Tuple[int, str]] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call) or not is_st_call(node):
            continue
        line = lines[node.lineno - 1] if 0 < node.lineno <= len(lines) else ""
        if "#" in line and any(tag in line.split("#", 1)[1].lower() for tag in IGNORE_COMMENTS):
            continue

        candidates = list(node.args[:1]) + [kw.value for kw in node.keywords if kw.arg in RELEVANT_KWARGS]
        for arg in candidates:
            text = literal_text(arg)
            if text is not None and not is_emoji_only(text):
                issues.append((node.lineno, f"st.{node.func.attr} with non-localized string {text[:40]!r}"))
                break
    return issues


def find_ui_files() -> Iterable[Path]:
    yield REPO_ROOT / "app.py"
    for p in sorted((REPO_ROOT / "src" / "ui").rglob("*.py")):
        if p.name != "i18n.py":
            yield p


def check_tables(translations: Dict[str, Dict[str, str]], reference: str = "en") -> List[str]:
    """Return one message per (locale, key) missing relative to the reference table."""
    expected = set(translations.get(reference, {}))
    problems: List[str] = []
    for code, table in sorted(translations.items()):
        for key in sorted(expected - set(table)):
            problems.append(f"locale {code!r} is missing key {key!r}")
    return problems


def main() -> int:
    parser = argparse.ArgumentParser(description="Check UI files and string tables for i18n gaps.")
    parser.add_argument("--enforce", action="store_true", help="Exit non-zero if issues are found.")
    args = parser.parse_args()

    findings: List[str] = []
    for file in find_ui_files():
        if not file.exists():
            continue
        rel = file.relative_to(REPO_ROOT)
        findings.extend(f"{rel}:{ln}: {msg}" for ln, msg in scan_file(file))

    from src.ui.i18n import TRANSLATIONS
    findings.extend(check_tables(TRANSLATIONS))

    if not findings:
        print("i18n check: OK")
        return 0

    for line in findings:
        print(line)
    print(f"\ni18n check: {len(findings)} issue(s) found.")

    enforce_env = os.environ.get("I18N_ENFORCE", "0").lower() not in ("", "0", "false")
    return 1 if (args.enforce or enforce_env) else 0


if __name__ == "__main__":
    raise SystemExit(main())

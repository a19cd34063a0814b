"""LPMLRepl: line-buffered REPL for trying out LPML interactively.

Also provides the ``lpml`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import IO, Sequence

from .decoder import decode, decode_file
from .document import Document
from .errors import LPMLError
from .settings import DecoderSettings, get_settings
from .values import Value, VBool, VFloat, VInt, VList, VMapping, VString, _Null, to_python


# ---------------------------------------------------------------------------
# LPMLRepl class (notebook / programmatic use)
# ---------------------------------------------------------------------------

class LPMLRepl:
    """Stateful REPL that buffers LPML lines until asked to decode them.

    Usage::

        repl = LPMLRepl()
        repl.feed("#@base")
        repl.feed("hp: 10")
        repl.feed("---")
        repl.feed("<<: base")
        repl.feed("name: orc")
        repl.run()          # → VMapping({"hp": VInt(10), "name": VString("orc")})

        repl.doc.titles     # ["base", "1"]
        repl.reset()        # clear state
    """

    def __init__(self, settings: DecoderSettings | None = None) -> None:
        self.settings = settings or get_settings()
        self.buffer: list[str] = []
        self.doc: Document | None = None
        self.last_result: Value | None = None

    def feed(self, line: str) -> None:
        self.buffer.append(line.rstrip("\n"))

    def eval(self, text: str) -> Value:
        """Decode *text* on its own, keeping its Document for inspection."""
        self.doc = Document.from_text(text, settings=self.settings, origin="<repl>")
        self.last_result = self.doc.decode()
        return self.last_result

    def run(self) -> Value:
        """Decode the buffered lines and clear the buffer."""
        text = "\n".join(self.buffer) + "\n"
        self.buffer = []
        return self.eval(text)

    def reset(self) -> None:
        """Clear the buffer and the last decoded document."""
        self.buffer = []
        self.doc = None
        self.last_result = None


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value) -> str:
    """Format a single value for compact one-line display."""
    if isinstance(value, VString):
        return f'"{value.value}"'
    if isinstance(value, (VInt, VFloat, VBool, _Null)):
        return str(value)
    if isinstance(value, VList):
        return "[" + ", ".join(_fmt_inline(v) for v in value.items) + "]"
    if isinstance(value, VMapping):
        return "{" + ", ".join(f"{k}: {_fmt_inline(v)}" for k, v in value.entries.items()) + "}"
    return repr(value)


def _fmt_inspect(value: Value) -> str:
    """Pretty-print a value for inspect() / i()."""
    if isinstance(value, VMapping):
        if not value.entries:
            return "VMapping {}"
        width = max(len(k) for k in value.entries)
        lines = ["VMapping {"]
        for k, v in value.entries.items():
            lines.append(f"  {k:<{width}}: {_fmt_inline(v)}")
        lines.append("}")
        return "\n".join(lines)

    if isinstance(value, VList):
        lines = ["VList ["]
        for i, v in enumerate(value.items):
            lines.append(f"  {i}: {_fmt_inline(v)}")
        lines.append("]")
        return "\n".join(lines)

    return _fmt_inline(value)


def _dump_json(value: Value, indent: int | None = 2) -> str:
    return json.dumps(to_python(value), indent=indent, ensure_ascii=False)


def _decode_and_print(repl: LPMLRepl, dest: IO[str]) -> None:
    try:
        result = repl.run()
    except LPMLError as exc:
        print(f"Error: {exc}", file=dest)
        return
    print(_dump_json(result), file=dest)


def _show_pages(repl: LPMLRepl, dest: IO[str]) -> None:
    """Print the page titles of the last decoded document."""
    if repl.doc is None:
        print("  (nothing decoded yet)", file=dest)
        return
    for page in repl.doc.pages:
        print(f"  #@{page.title}  : {_fmt_inline(page.result)}", file=dest)


def _show_buffer(repl: LPMLRepl, dest: IO[str]) -> None:
    if not repl.buffer:
        print("  (buffer is empty)", file=dest)
        return
    for i, line in enumerate(repl.buffer, 1):
        print(f"  {i:>3} | {line}", file=dest)


def _load_file(repl: LPMLRepl, filepath: str) -> None:
    try:
        with open(filepath, encoding=repl.settings.encoding) as fh:
            for file_line in fh:
                repl.feed(file_line)
    except OSError as exc:
        print(f"Error reading '{filepath}': {exc}", file=sys.stderr)


def _process_line(repl: LPMLRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    command = line.strip()

    # ── Exit ──────────────────────────────────────────────────────────────
    if command in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if command == ":go":
        _decode_and_print(repl, dest)
        return True

    if command == ":pages":
        _show_pages(repl, dest)
        return True

    if command == ":show":
        _show_buffer(repl, dest)
        return True

    if command == ":reset":
        repl.reset()
        return True

    # ── inspect() / i() ───────────────────────────────────────────────────
    for prefix in ("inspect(", "i("):
        if command.startswith(prefix) and command.endswith(")"):
            expr = command[len(prefix):-1].strip()
            try:
                result = repl.eval(expr.replace("\\n", "\n") + "\n")
            except LPMLError as exc:
                print(f"Error: {exc}", file=dest)
            else:
                print(_fmt_inspect(result), file=dest)
            return True

    # ── Batch file ────────────────────────────────────────────────────────
    if command.startswith("?<< "):
        _load_file(repl, command[4:].strip())
        return True

    # ── Regular LPML input (indentation is significant, keep it) ─────────
    repl.feed(line)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _interactive(repl: LPMLRepl) -> None:
    dest: IO[str] = sys.stdout
    _file: IO[str] | None = None

    print("LPML REPL  (:q to quit  |  :go  :show  :pages  :reset  |  inspect(<lpml>))")

    while True:
        try:
            line = input("LPML> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        # ── Output redirect: ?>> filepath  /  ?>> ─────────────────────────
        if line.startswith("?>> "):
            filepath = line[4:].strip()
            if _file:
                _file.close()
            try:
                _file = open(filepath, "w", encoding="utf-8")
                dest = _file
            except OSError as exc:
                print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
            continue

        if line.strip() == "?>>":
            if _file:
                _file.close()
                _file = None
            dest = sys.stdout
            continue

        if not _process_line(repl, line, dest):
            break

    if _file:
        _file.close()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lpml",
        description="Decode LPML files and print them as JSON.",
    )
    parser.add_argument("files", nargs="*", help="LPML files to decode (default: stdin)")
    parser.add_argument("--strict", action="store_true", help="fail on unrecognised lines")
    parser.add_argument("--root", help="directory that /-prefixed merge paths live under")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    parser.add_argument("-i", "--interactive", action="store_true", help="start the REPL")
    parser.add_argument("-v", "--verbose", action="store_true", help="log decoder debug output")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """``lpml`` CLI (``python -m lpml.repl``)."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = {}
    if args.strict:
        overrides["strict"] = True
    if args.root:
        overrides["root"] = args.root
    settings = DecoderSettings.model_validate({**get_settings().model_dump(), **overrides})

    if args.interactive:
        _interactive(LPMLRepl(settings))
        return 0

    indent = args.indent or None
    try:
        if not args.files:
            text = sys.stdin.read()
            print(_dump_json(decode(text, settings=settings, origin="<stdin>"), indent))
        for path in args.files:
            print(_dump_json(decode_file(path, settings=settings), indent))
    except (LPMLError, OSError) as exc:
        print(f"lpml: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

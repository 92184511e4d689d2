"""Sample sources and a stand-in formatter for stagedfmt tests."""

# The fake formatter's canonical form: no trailing whitespace on any line and
# exactly one newline at the end of the file.

FORMATTED_RS = """fn main() {
    println!("hello");
}
"""

UNFORMATTED_RS = """fn main() {   \n    println!("hello");\n}\n\n\n"""

UNFORMATTED_RS_CANONICAL = FORMATTED_RS

BROKEN_RS = "pub fn g( {\n"

UNFORMATTED_PY = "def f( ):   \n    return 1\n\n\n"

# Mimics `cargo fmt` closely enough for the hook: `--check` with
# `--files-with-diff` prints the absolute path of every file that is not in
# canonical form and exits 1, plain mode rewrites the files. Every invocation
# is appended as a JSON line to $FAKE_CARGO_LOG.
# A file containing BROKEN_RS makes the fake formatter fail the way rustfmt
# does on a parse error: exit 1, a message on stderr, nothing listed.
FAKE_CARGO_SOURCE = '''
import json
import os
import sys

SYNTAX_ERROR_MARKER = "pub fn g( {"
args = sys.argv[1:]
log = os.environ.get("FAKE_CARGO_LOG")

if not args or args[0] != "fmt":
    sys.exit(101)

check = "--check" in args
rustfmt_args = args[args.index("--") + 1:] if "--" in args else []
files = []
skip = False
for arg in rustfmt_args:
    if skip:
        skip = False
        continue
    if arg == "--config":
        skip = True
        continue
    if arg.startswith("-"):
        continue
    files.append(arg)

if log:
    with open(log, "a", encoding="utf-8") as handle:
        handle.write(json.dumps({"check": check, "files": files, "args": args}) + "\\n")


def canonical(text):
    lines = [line.rstrip() for line in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    return "\\n".join(lines) + "\\n"


bad = []
for name in files:
    with open(name, encoding="utf-8") as handle:
        text = handle.read()
    if SYNTAX_ERROR_MARKER in text:
        sys.stderr.write("error: this file contains an unclosed delimiter\\n --> " + name + "\\n")
        sys.exit(1)
    if canonical(text) != text:
        bad.append(name)

if check:
    if "--files-with-diff" in rustfmt_args:
        for name in bad:
            print(os.path.abspath(name))
    sys.exit(1 if bad else 0)

for name in bad:
    with open(name, encoding="utf-8") as handle:
        text = handle.read()
    with open(name, "w", encoding="utf-8") as handle:
        handle.write(canonical(text))
sys.exit(0)
'''

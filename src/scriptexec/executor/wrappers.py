"""
Program templates that wrap a user script for a target interpreter.

A user script is the body of an implicit function.  Each generator turns
it into a standalone program that

* binds the embedded input data to a well-known name,
* sends logging calls to standard error and ``print`` calls to standard
  output,
* runs the body and writes its return value, if any, to standard output:
  strings verbatim, everything else as JSON.

Every script line is copied onto exactly one program line, so interpreter
line numbers map back to the script by subtracting :attr:`line_offset`.
"""

from __future__ import annotations

from typing import Any

from ..serializer import escape_json


def prefix_lines(script: str, indent: str) -> str:
    """Prefix every line of ``script`` with ``indent``, keeping line breaks."""
    return "\n".join(indent + line for line in script.split("\n"))


class WrapperGenerator:
    """Fill a program template with an input literal and a script body."""

    #: Name the script uses to read its input data.
    input_name: str = ""
    #: Indentation applied to the script body.
    indent: str = ""
    template: str = ""

    @property
    def line_offset(self) -> int:
        """Number of program lines that precede the first script line."""
        head = self.template.split("{body}", 1)[0]
        return head.count("\n")

    def wrap(self, script: str, input_literal: str) -> str:
        """Build the program for an already escaped input literal."""
        return self.template.format(
            input_literal=input_literal,
            body=prefix_lines(script, self.indent),
        )

    def wrap_data(self, script: str, input_data: Any) -> str:
        """Serialize ``input_data`` and build the program."""
        return self.wrap(script, escape_json(input_data))


class PythonWrapper(WrapperGenerator):
    """Python 3 program around a script run as the body of ``script_fun``."""

    input_name = "inputData"
    indent = "  "
    template = """
import sys,json
inputData = json.loads({input_literal})
def log(*args, **kwargs):
  print(*args, file=sys.stderr, **kwargs)

def script_fun():
{body}

result = script_fun()
if not result is None:
  if isinstance(result, str):
    sys.stdout.write(result)
  else:
    sys.stdout.write(json.dumps(result))
"""

    def wrap(self, script: str, input_literal: str) -> str:
        # A body of only blank lines and comments does not compile; comments
        # carry no indentation, so a trailing ``pass`` is always valid there.
        if all(not line.strip() or line.strip().startswith("#") for line in script.split("\n")):
            script += "\npass"
        return super().wrap(script, input_literal)


class QuickJsWrapper(WrapperGenerator):
    """QuickJS program around a script run inside an immediately invoked function.

    Requires the interpreter's ``std`` module (``--std``).
    """

    input_name = "$"
    indent = ""
    template = """
const $ = JSON.parse({input_literal});
console.error = function(...args) {{
  std.err.puts(args.join(' '));
  std.err.puts('\\n');
}}
console.log = console.error;
log = console.error;
print = function(...args) {{
  std.out.puts(args.join(' '));
}}
let result = function() {{
{body}
}}();
if (result != null) {{
  if (typeof result !== 'string') {{
    result = JSON.stringify(result);
  }}
  if (result !== undefined) {{
    std.out.puts(result);
  }}
}}
"""

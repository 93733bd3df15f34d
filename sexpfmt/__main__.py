# Copyright 2020 Stanford University

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse, sys
from typing import List, Optional, TextIO

from .parse import parse, ParseError
from .render import FormatArgs, render
from .sexpr import dump

def non_negative(s: str) -> int:
    n = int(s)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {s}")
    return n

def read_input(args: argparse.Namespace, stdin: TextIO) -> str:
    if args.filename is not None:
        with open(args.filename) as f:
            return f.read()
    if not args.silent:
        print("Input s-expression to format: ")
    if not args.multiline:
        return stdin.readline()
    # accumulate lines until a blank one (or EOF)
    lines: List[str] = []
    for line in stdin:
        if line.strip() == "":
            break
        lines.append(line)
    return "".join(lines)

def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='sexpfmt', description="Re-indent an s-expression, breaking lines by nesting depth")
    parser.add_argument("filename", metavar="FILE", nargs='?', default=None, help="read the s-expression from FILE instead of stdin")
    parser.add_argument("-s", "--silent", action="store_true", help="don't prompt for input")
    parser.add_argument("-m", "--multiline", action="store_true", help="read lines from stdin until a blank line")
    parser.add_argument("-d", "--debug", action="store_true", help="print the parsed tree before formatting")
    parser.add_argument("-c", "--complexity-threshold", metavar='N', type=non_negative, default=1, help="the nesting depth of a s-expression to display on a single line")
    parser.add_argument("-q", "--short-quantifiers", action="store_true", help="keep the first argument of forall/exists on the quantifier's line")
    parser.add_argument("--log", metavar='L', type=str, default='', help="redirect output to file")
    args = parser.parse_args(argv)

    if len(args.log) > 0:
        sys.stdout = open(args.log, "w")

    try:
        sexpr = parse(read_input(args, sys.stdin))
        if args.debug:
            print("final result:")
            print(dump(sexpr) if sexpr is not None else "<empty>")
        render(sexpr, FormatArgs(args.complexity_threshold, args.short_quantifiers), sys.stdout)
    except ParseError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print(f"Error: s-expression nested too deeply (recursion limit is {sys.getrecursionlimit()})", file=sys.stderr)
        sys.exit(1)
    print()
    sys.stdout.flush()

if __name__ == "__main__":
    main()

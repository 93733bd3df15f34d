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

import io
from dataclasses import dataclass, replace
from typing import Optional, TextIO

from .sexpr import Atom, Sexpr, is_quantifier

INDENT = 4

@dataclass(frozen=True)
class FormatArgs:
    # the maximum complexity to print a sexpr on a single line
    complexity_threshold: int = 1
    # keep the first argument of forall/exists on the quantifier's line
    short_quantifiers: bool = False
    # number of spaces a new line starts with at the current nesting
    depth: int = 0
    def __post_init__(self) -> None:
        if self.complexity_threshold < 0:
            raise ValueError(f"complexity threshold must be non-negative, got {self.complexity_threshold}")
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}")
    def with_depth(self, depth: int) -> 'FormatArgs':
        return replace(self, depth=depth)
    def tab(self) -> str:
        return " " * self.depth

def render(node: Optional[Sexpr], args: FormatArgs, out: TextIO) -> None:
    """Write `node` to `out`, one piece at a time.

    A compound whose complexity exceeds args.complexity_threshold is broken
    across lines: its arguments each start a new line indented INDENT spaces
    past the compound, and the closing paren goes on its own line at the
    compound's indentation. Otherwise it is written on a single line.
    Errors raised by `out.write` propagate immediately.
    """
    if node is None:
        return
    if isinstance(node, Atom):
        out.write(node.text)
        return
    multiline = node.complexity > args.complexity_threshold
    if multiline:
        sub_args = args.with_depth(args.depth + INDENT)
        sep = "\n" + sub_args.tab()
    else:
        sub_args = args
        sep = " "
    out.write("(")
    render(node.head, args, out)
    rest = node.args
    if args.short_quantifiers and is_quantifier(node.head) and len(rest) > 0:
        out.write(" ")
        render(rest[0], sub_args, out)
        rest = rest[1:]
    for sexpr in rest:
        out.write(sep)
        render(sexpr, sub_args, out)
    if multiline:
        out.write("\n" + args.tab())
    out.write(")")

def format_sexpr(node: Optional[Sexpr], args: FormatArgs = FormatArgs()) -> str:
    buf = io.StringIO()
    render(node, args, buf)
    return buf.getvalue()

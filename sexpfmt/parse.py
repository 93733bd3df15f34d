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

import re
from typing import List, Optional, Pattern, NoReturn, Type

from .sexpr import Atom, Compound, Sexpr, SrcLoc

class ParseError(Exception):
    def __init__(self, desc: str = "?", loc: SrcLoc = (0,0)):
        self.desc = desc
        self.loc = loc
    def __str__(self) -> str:
        return "Parse Error: " + self.desc

# Extra non-whitespace input remained after a complete top-level expression
class UnclosedInput(ParseError): pass
# Input ran out inside a compound
class UnterminatedCompound(ParseError): pass
# A compound stopped on something other than `)`, or has no head at all
class MalformedCompound(ParseError): pass

ws = re.compile(r"\s+")
lparen = re.compile(r"\(")
rparen = re.compile(r"\)")
ident = re.compile(r"[^()\s]+")

class Input(object):
    def __init__(self, s: str):
        self.string = s
        self.index = 0
        self.line = 1
        self.column = 1
    def matches(self, r: Pattern) -> bool:
        return r.match(self.string, self.index) is not None
    def consume(self, r: Pattern, err: Type[ParseError] = ParseError, desc: str = "expected token not found") -> str:
        m = r.match(self.string, self.index)
        if m is None:
            self.error(err, desc)
        consumed_str = m.group()
        self.index += len(consumed_str)
        # Keep track of physical source lines for error messages
        lines = consumed_str.count('\n')
        if lines > 0:
            self.line += lines
            self.column = len(consumed_str) - consumed_str.rfind('\n')
        else:
            self.column += len(consumed_str)
        return consumed_str
    def skip_ws(self) -> None:
        if self.matches(ws):
            self.consume(ws)
    def loc(self) -> SrcLoc:
        return (self.line, self.column)
    def eof(self) -> bool:
        return self.index == len(self.string)
    def error(self, err: Type[ParseError], desc: str) -> NoReturn:
        s = 20
        context = self.string[self.index : self.index+s]
        if self.index + s < len(self.string):
            context += "..."
        if context == "":
            context = "<end of input>"
        raise err(str(desc)+" (at "+str(self.line)+":"+str(self.column)+"): "+context, self.loc())


def parse(s: str) -> Optional[Sexpr]:
    """Parse exactly one s-expression from `s`.

    Returns None when `s` is empty or only whitespace. Raises a subclass of
    ParseError on the first malformed construct; no partial tree is returned.
    """
    def p_expr(input: Input) -> Optional[Sexpr]:
        # None means there is nothing more to read at this level: either the
        # input is exhausted or the enclosing compound is about to close.
        input.skip_ws()
        if input.eof():
            return None
        start = input.loc()
        if input.matches(lparen):
            input.consume(lparen)
            head = p_expr(input)
            if head is None:
                if input.eof():
                    input.error(UnterminatedCompound, "malformed sexpr: expected `)`, found end of input")
                input.error(MalformedCompound, "malformed sexpr: expected a head expression, found `)`")
            args: List[Sexpr] = []
            while True:
                arg = p_expr(input)
                if arg is None:
                    break
                args.append(arg)
            if input.eof():
                input.error(UnterminatedCompound, "malformed sexpr: expected `)`, found end of input")
            # unreachable: the argument loop only stops at end of input or `)`
            input.consume(rparen, MalformedCompound, "malformed sexpr: expected `)`, found something else")
            return Compound(head, args, start)
        elif input.matches(ident):
            return Atom(input.consume(ident), start)
        else:
            return None

    input = Input(s)
    r = p_expr(input)
    input.skip_ws()
    if not input.eof():
        input.error(UnclosedInput, "unclosed sexpr: unexpected trailing input")
    return r

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

from typing import List, Tuple, Union

SrcLoc = Tuple[int,int]
Sexpr = Union['Atom', 'Compound']

# Node types: Atom (a bare token), Compound (a parenthesized form).
# Complexity is the nesting depth of the subtree and is fixed at construction.
class Node(object):
    complexity: int = 0
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node): return NotImplemented
        return self._unpack() == other._unpack()
    def __hash__(self) -> int: return hash(self._unpack())
    def _unpack(self) -> Tuple: return ()

class Atom(Node):
    def __init__(self, text: str, src_loc: SrcLoc = (0,0)):
        assert len(text) > 0
        self.text = text
        self.loc = src_loc
        self.complexity = 0
    def __repr__(self) -> str:
        return self.text
    def _unpack(self) -> Tuple: return ('Atom', self.text)

class Compound(Node):
    def __init__(self, head: Sexpr, args: List[Sexpr], src_loc: SrcLoc = (0,0)):
        self.head = head
        self.args = args
        self.loc = src_loc
        self.complexity = 1 + max([head.complexity] + [a.complexity for a in args])
    def __repr__(self) -> str:
        return "(" + " ".join(map(repr, [self.head] + self.args)) + ")"
    def _unpack(self) -> Tuple: return ('Compound', self.head._unpack(), tuple(a._unpack() for a in self.args))

def is_quantifier(node: Sexpr) -> bool:
    return isinstance(node, Atom) and node.text in ("forall", "exists")

def dump(node: Sexpr, indent: int = 0) -> str:
    """Debug view of a parsed tree, one node per line with complexity and source location."""
    tab = " " * indent
    loc = f"{node.loc[0]}:{node.loc[1]}"
    if isinstance(node, Atom):
        return f"{tab}Atom {node.text!r} complexity=0 at {loc}"
    lines = [f"{tab}Compound complexity={node.complexity} at {loc}",
             f"{tab}  head:",
             dump(node.head, indent + 4)]
    if len(node.args) > 0:
        lines.append(f"{tab}  args:")
        lines.extend(dump(a, indent + 4) for a in node.args)
    return "\n".join(lines)

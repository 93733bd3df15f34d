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

import z3

from .parse import parse
from .render import FormatArgs, format_sexpr

# z3 prints quantifiers as (forall ((x Int) (y Int)) body), so short
# quantifiers keep the whole binder list on the head line.
def format_z3(expr: z3.ExprRef, args: FormatArgs = FormatArgs()) -> str:
    return format_sexpr(parse(expr.sexpr()), args)

"""Chunk sequence to live expression and static placeholder."""

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from bindify.compiler.escaping import escape_js_string

VIEW_MODEL = "this"


@dataclass(frozen=True)
class CompiledBinding:
    """Generated code for one bound value."""

    expression: str  # live binding expression, e.g. 'Hello ' + this.name()
    placeholder: str  # static text left in the document, e.g. Hello {{name()}}


def accessor_call(path: str) -> str:
    """'user.name' -> 'this.user.name()'"""
    if path == VIEW_MODEL or path.startswith(VIEW_MODEL + "."):
        return f"{path}()"
    return f"{VIEW_MODEL}.{path}()"


def compile_chunks(
    chunks: Sequence[str],
    output_delimiters: Tuple[str, str] = ("{{", "}}"),
    literal_marks: Optional[Mapping[str, str]] = None,
) -> CompiledBinding:
    """
    Build the live expression and the placeholder text in one pass.

    ['Hello ', 'name', '!'] -> ("'Hello ' + this.name() + '!'", 'Hello {{name()}}!')
    ['', 'name', '']        -> ('this.name()', '{{name()}}')
    ['', 'a', '', 'b', '']  -> ("'' + this.a() + this.b()", '{{a()}}{{b()}}')

    The second form is deliberate: a sequence that is exactly one expression
    is not seeded with ``''``, so ``value="{name}"`` binds ``value:this.name()``
    and keeps the accessor's own value type. Any other sequence starting with
    an expression is seeded so the result is a string concatenation.

    ``literal_marks`` maps shield marks to the stand-ins used inside string
    literals, so a protected block is later restored there in escaped form.
    The placeholder keeps the plain marks.
    """
    out_open, out_close = output_delimiters

    lone_expression = len(chunks) == 3 and not chunks[0] and not chunks[2]

    js: List[str] = []
    text: List[str] = []
    for index, chunk in enumerate(chunks):
        if index % 2:
            js.append(accessor_call(chunk))
            text.append(f"{out_open}{chunk}(){out_close}")
        else:
            if chunk:
                literal = escape_js_string(chunk)
                for mark, literal_mark in (literal_marks or {}).items():
                    literal = literal.replace(mark, literal_mark)
                js.append(literal)
            elif index == 0 and not lone_expression:
                js.append("''")
            text.append(chunk)

    return CompiledBinding(expression=" + ".join(js), placeholder="".join(text))

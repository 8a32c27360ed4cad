"""
Compact JSON formatter that keeps arrays of numbers on single lines.

Map files hold long lists of small integer pairs; keeping each numeric array
on one line keeps them diffable and readable.
"""

import json


def _is_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def dumps(obj, indent=2):
    """
    Serialize obj to a JSON formatted string.

    Lists and tuples containing only numbers stay on one line; everything else
    is indented normally.
    """

    def format_value(v, level):
        pad = " " * (indent * level)
        child_pad = " " * (indent * (level + 1))

        if isinstance(v, tuple):
            v = list(v)

        if isinstance(v, list):
            if not v or all(_is_number(x) for x in v):
                return json.dumps(v)
            items = [child_pad + format_value(x, level + 1) for x in v]
            return "[\n" + ",\n".join(items) + "\n" + pad + "]"

        if isinstance(v, dict):
            if not v:
                return "{}"
            items = [
                f"{child_pad}{json.dumps(str(k))}: {format_value(val, level + 1)}"
                for k, val in v.items()
            ]
            return "{\n" + ",\n".join(items) + "\n" + pad + "}"

        return json.dumps(v)

    return format_value(obj, 0)


def dump(obj, fp, indent=2):
    """Serialize obj to a file-like object."""
    fp.write(dumps(obj, indent))
    fp.write("\n")


def load(fp):
    """Parse JSON from a file-like object."""
    return json.load(fp)

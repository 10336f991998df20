from __future__ import annotations
import os


def write_text_atomic(path: str, text: str) -> str:
    """Write `text` to `path` via a sibling temp file and os.replace.

    Readers never observe a half-written harness. Errors propagate; the temp
    file is removed if the write itself fails.
    """
    out_dir = os.path.dirname(os.path.abspath(path))
    os.makedirs(out_dir, exist_ok=True)
    tmp = path + '.tmp'
    try:
        with open(tmp, 'w', encoding='utf-8', newline='\n') as f:
            f.write(text)
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)
    return path

import re

_WHITESPACE = re.compile(r'\s+')


def tag_of(line: str, tag_size: int) -> str:
    """Returns the tag name found in the first ``tag_size`` columns of a line."""
    return line[:tag_size].strip()


def strip_tag(line: str, tag_size: int) -> str:
    """Returns the line without its tag column. Short lines become empty."""
    return line[tag_size:]


def clean(text: str) -> str:
    """Collapses every run of white space to one blank and trims both ends."""
    return _WHITESPACE.sub(' ', text).strip()


def split_lines(text: str) -> list[str]:
    """Splits on newlines keeping each terminator, so ``''.join`` gives the text back."""
    if not text:
        return []

    pieces = [line + '\n' for line in text.split('\n')]
    pieces[-1] = pieces[-1][:-1]
    if pieces[-1] == '':
        pieces.pop()
    return pieces

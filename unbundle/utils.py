from pathlib import PurePath

__all__ = ('is_exported', 'snake_case', 'source_base_name')


def is_exported(name: str) -> bool:
    """Go exports an identifier when its first character is upper case."""
    return bool(name) and name[0].isupper()


def snake_case(name: str) -> str:
    """Convert a Go identifier into a snake case file name.

    Acronyms are kept together and lower-cased: ``HTTPServer`` becomes
    ``http_server``. A digit run is split from the letters before it:
    ``Base64`` becomes ``base_64``.
    """

    def is_lower(idx: int) -> bool:
        return 0 <= idx < len(name) and name[idx].islower()

    out: list[str] = []
    for i, char in enumerate(name):
        previous = name[i - 1] if i > 0 else ''
        if i > 0 and previous != '_':
            if char.isupper() and (is_lower(i - 1) or is_lower(i + 1)):
                out.append('_')
            elif char.isdigit() and not previous.isdigit():
                out.append('_')
        out.append(char.lower())

    return ''.join(out)


def source_base_name(path: str) -> str:
    """Return the file name of ``path`` without its extension."""
    return PurePath(path).stem

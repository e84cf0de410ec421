PERIOD = '.'
SLASH = '/'

__all__ = (
    'PERIOD',
    'SLASH',
    'capitalize',
    'join_segments',
    'split_segments',
    'to_directory_path',
)


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def split_segments(path: str, separator: str = PERIOD) -> list[str]:
    """Split a dotted (or slashed) path into its non-empty segments."""
    if not path:
        return []
    return [segment for segment in path.split(separator) if segment]


def join_segments(segments, separator: str = PERIOD) -> str:
    return separator.join(segments)


def to_directory_path(path: str) -> str:
    """Convert a period-delimited logical path into a slash-delimited one."""
    return join_segments(split_segments(path), SLASH)

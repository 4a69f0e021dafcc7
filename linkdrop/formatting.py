"""
Display helpers used by the templates and the CLI.
"""


def format_duration(ms):
    """Milliseconds to m:ss."""
    try:
        seconds = int(ms or 0) // 1000
    except (TypeError, ValueError):
        return '0:00'
    minutes, seconds = divmod(seconds, 60)
    return f"{minutes}:{seconds:02d}"


def format_bytes(num):
    try:
        num = int(num or 0)
    except (TypeError, ValueError):
        return '0 Bytes'
    if num <= 0:
        return '0 Bytes'
    sizes = ['Bytes', 'KB', 'MB', 'GB', 'TB']
    i = 0
    value = float(num)
    while value >= 1024 and i < len(sizes) - 1:
        value /= 1024
        i += 1
    value = round(value, 2)
    # 1.50 -> 1.5, 2.00 -> 2
    return f"{value:g} {sizes[i]}"


def format_count(value):
    """Thousands separators for like/comment counters; strings pass through."""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return f"{int(value):,}"
    return str(value or 0)

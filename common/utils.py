"""
Display formatting helpers shared by the audit trail and its API
"""


def format_name(name):
    """Title-case every space-separated word ("jANE doe" -> "Jane Doe")"""
    if not name or not isinstance(name, str):
        return ""
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split(" "))


def titleize_identifier(value):
    """Turn an underscore identifier into words ("widget_thing" -> "Widget Thing")"""
    return " ".join(word[:1].upper() + word[1:] for word in value.split("_") if word)


def truncate(text, max_length):
    """Cut text to max_length characters, marking the cut with '...'"""
    if len(text) > max_length:
        return f"{text[:max_length]}..."
    return text


def capitalize_first(text):
    """Upper-case only the first character"""
    return text[:1].upper() + text[1:]

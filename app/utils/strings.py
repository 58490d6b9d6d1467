"""String helpers."""


def to_camel_case(name: str) -> str:
    """
    Convert a snake_case identifier to camelCase.

    Database column names come back from driver messages in snake_case,
    while the API speaks camelCase:

        >>> to_camel_case("publisher_id")
        'publisherId'
        >>> to_camel_case("id")
        'id'
    """
    head, *rest = name.split("_")
    return head + "".join(word[:1].upper() + word[1:] for word in rest)

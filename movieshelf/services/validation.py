from movieshelf.services.errors import InvalidArgumentError


def require(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidArgumentError(message)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def validate_page(page: object) -> None:
    require(_is_positive_int(page), "Page must be a positive integer")


def validate_page_size(page_size: object) -> None:
    require(_is_positive_int(page_size), "Page size must be a positive integer")


def validate_query(query: object) -> str:
    require(isinstance(query, str) and bool(query.strip()), "Search query cannot be empty")
    return str(query).strip()


def validate_external_id(external_id: object) -> None:
    require(isinstance(external_id, str) and bool(external_id.strip()), "Movie ID is required")

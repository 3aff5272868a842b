from enum import Enum


class ErrorKind(str, Enum):
    invalid_argument = "invalid_argument"
    already_exists = "already_exists"
    not_found = "not_found"
    io_failure = "io_failure"
    upstream_timeout = "upstream_timeout"
    upstream_unavailable = "upstream_unavailable"
    upstream_auth_failure = "upstream_auth_failure"
    upstream_error = "upstream_error"
    internal = "internal"


class CatalogOutcome(str, Enum):
    success = "success"
    no_results = "no_results"
    failure = "failure"

from __future__ import annotations

from postgrest.exceptions import APIError

# PostgREST answers `.single()` queries that matched nothing with this code.
NO_ROWS_CODE = "PGRST116"


class BackendNotConfiguredError(RuntimeError):
    pass


class AuthenticationRequiredError(PermissionError):
    pass


class RecordNotFoundError(LookupError):
    def __init__(self, table: str, record_id: str):
        super().__init__(f"No {table} row with id {record_id}")
        self.table = table
        self.record_id = record_id


def is_no_rows_error(exc: BaseException) -> bool:
    return isinstance(exc, APIError) and exc.code == NO_ROWS_CODE

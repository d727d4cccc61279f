"""Page Helpers — shared fetch/toast/redirect plumbing for the HTML routes.

Invariants:
    - A failed fetch shows one error toast and yields an empty list (page still renders)
    - A failed submit shows the API message (else the fixed text) and leaves state unchanged
    - Every form POST answers with 303 See Other (Post/Redirect/Get)
"""

from fastapi import Request, status
from fastapi.responses import RedirectResponse

from binhub.api.flash import push_error, push_toast
from binhub.infrastructure.api_client import ApiResult
from binhub.schemas.records import R, parse_record, parse_records


def see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def records_or_toast(
    request: Request, result: ApiResult, model: type[R], key: str, failure: str,
) -> list[R]:
    if not result.success:
        push_error(request, result.error_message(failure))
        return []
    return parse_records(model, result.get(key, []))


def record_from(result: ApiResult, model: type[R], key: str) -> R | None:
    if not result.success:
        return None
    return parse_record(model, result.get(key))


def finish(
    request: Request, result: ApiResult, success: str, failure: str, url: str,
) -> RedirectResponse:
    """Toast the outcome of a submit and redirect to url."""
    if result.success:
        push_toast(request, success)
    else:
        push_error(request, result.error_message(failure))
    return see_other(url)

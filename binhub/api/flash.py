"""Flash Toasts — transient messages carried across redirects in the signed session.

Invariants:
    - pop_toasts() returns queued toasts in push order and empties the queue
    - Only message text and kind are stored (session cookie stays small)
"""

from fastapi import Request

from binhub.core.domain_types import ToastKind

TOAST_KEY = "toasts"


def push_toast(request: Request, message: str, kind: ToastKind | str = ToastKind.SUCCESS):
    kind_value = kind.value if isinstance(kind, ToastKind) else str(kind)
    queue = list(request.session.get(TOAST_KEY, []))
    queue.append({"message": message, "kind": kind_value})
    request.session[TOAST_KEY] = queue


def push_error(request: Request, message: str):
    push_toast(request, message, ToastKind.ERROR)


def pop_toasts(request: Request) -> list[dict]:
    return request.session.pop(TOAST_KEY, None) or []

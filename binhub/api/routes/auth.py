"""Auth Pages — login, signup, logout and the root redirect.

Invariants:
    - Login/signup errors are shown inline on the form (no redirect), input preserved
    - A successful login/signup stores token + user in the signed session and
      lands on the role's home
    - Signed-in users never see the login/signup forms
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Request
from pydantic import ValidationError

from binhub.api.deps import Api, Hub, TOKEN_KEY, home_url, session_user, sign_in, sign_out
from binhub.api.error_handlers import first_error_message
from binhub.api.flash import push_toast
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import see_other
from binhub.core.domain_types import Role
from binhub.schemas.forms import LoginForm, SignupForm
from binhub.schemas.records import User, parse_record
from binhub.services import auth as auth_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


def _signed_in_redirect(request: Request):
    user = session_user(request)
    return see_other(home_url(user.role)) if user else None


@router.get("/")
async def root(request: Request):
    return _signed_in_redirect(request) or see_other("/login")


@router.get("/login")
async def login_page(request: Request):
    return _signed_in_redirect(request) or render(request, "auth/login.html", form={})


@router.post("/login")
async def login(
    request: Request,
    api: Api,
    phone: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    submitted = {"phone": phone}
    try:
        form = LoginForm(phone=phone, password=password)
    except ValidationError as e:
        return render(
            request, "auth/login.html", status_code=400,
            form=submitted, error=first_error_message(e.errors()),
        )

    result = await auth_service.login(api, form.phone, form.password)
    user = parse_record(User, result.get("user")) if result.success else None
    token = result.get("token") if result.success else None
    if user is None or not token:
        return render(
            request, "auth/login.html", status_code=400, form=submitted,
            error=result.error_message("Login failed. Please check your credentials."),
        )

    sign_in(request, token, user.model_dump(mode="json"))
    logger.info("User signed in", extra={"role": user.role})
    push_toast(request, "Login successful!")
    return see_other(home_url(user.role))


@router.get("/signup")
async def signup_page(request: Request):
    return _signed_in_redirect(request) or render(
        request, "auth/signup.html", form={"role": Role.CUSTOMER.value},
    )


@router.post("/signup")
async def signup(
    request: Request,
    api: Api,
    name: Annotated[str, Form()] = "",
    phone: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    role: Annotated[str, Form()] = Role.CUSTOMER.value,
    supplier_type: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    submitted = {
        "name": name, "phone": phone, "email": email,
        "role": role, "supplier_type": supplier_type,
    }
    try:
        form = SignupForm.model_validate({**submitted, "password": password})
    except ValidationError as e:
        return render(
            request, "auth/signup.html", status_code=400,
            form=submitted, error=first_error_message(e.errors()),
        )

    result = await auth_service.signup(api, form.to_payload())
    user = parse_record(User, result.get("user")) if result.success else None
    token = result.get("token") if result.success else None
    if user is None or not token:
        return render(
            request, "auth/signup.html", status_code=400, form=submitted,
            error=result.error_message("Signup failed. Please check your information."),
        )

    sign_in(request, token, user.model_dump(mode="json"))
    logger.info("Account created", extra={"role": user.role})
    push_toast(request, "Account created successfully!")
    return see_other(home_url(user.role))


@router.post("/logout")
async def logout(request: Request, hub: Hub):
    await hub.forget(request.session.get(TOKEN_KEY))
    sign_out(request)
    push_toast(request, "Logged out successfully")
    return see_other("/login")

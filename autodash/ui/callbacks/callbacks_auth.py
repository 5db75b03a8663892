from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import dash
from dash import Input, Output, State, html

from autodash.core.exceptions import AuthError
from autodash.services.auth_service import User
from autodash.ui.helpers import error_alert, get_session
from autodash.ui.ids import IDs

if TYPE_CHECKING:
    from autodash.ui.config import AppConfig

logger = logging.getLogger(__name__)

HIDDEN = {"display": "none"}
VISIBLE: dict = {}


def _signed_in_outputs(user: Optional[User]):
    """(badge, sign-in style, sign-out style) for the navbar."""
    if user is None:
        return "", VISIBLE, HIDDEN
    badge = html.Span([html.Strong(user.name), html.Small(f" ({user.email})", className="text-muted")])
    return badge, HIDDEN, VISIBLE


def register_auth_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    @app.callback(
        Output(IDs.Control.USER_BADGE, "children"),
        Output(IDs.Control.SIGN_IN_BTN, "style"),
        Output(IDs.Control.SIGN_OUT_BTN, "style"),
        Output(IDs.Control.AUTH_MODAL, "is_open"),
        Output(IDs.Control.AUTH_STATUS, "children"),
        Input(IDs.Store.SESSION_ID, "data"),
        Input(IDs.Control.SIGN_IN_BTN, "n_clicks"),
        Input(IDs.Control.AUTH_LOGIN_BTN, "n_clicks"),
        Input(IDs.Control.AUTH_REGISTER_BTN, "n_clicks"),
        Input(IDs.Control.SIGN_OUT_BTN, "n_clicks"),
        State(IDs.Control.AUTH_NAME, "value"),
        State(IDs.Control.AUTH_EMAIL, "value"),
        State(IDs.Control.AUTH_PASSWORD, "value"),
    )
    def handle_auth(session_id, _open, _login, _register, _logout, name, email, password):
        # Make sure the id is valid before touching the auth store
        get_session(ctx, session_id)
        auth = ctx.auth_service
        trigger = dash.ctx.triggered_id

        if trigger == IDs.Control.SIGN_IN_BTN:
            return (*_signed_in_outputs(auth.current_user(session_id)), True, None)

        if trigger == IDs.Control.SIGN_OUT_BTN:
            auth.logout(session_id)
            return (*_signed_in_outputs(None), False, None)

        if trigger in (IDs.Control.AUTH_LOGIN_BTN, IDs.Control.AUTH_REGISTER_BTN):
            try:
                if trigger == IDs.Control.AUTH_REGISTER_BTN:
                    user = auth.register(session_id, name or "", email or "", password or "")
                else:
                    user = auth.login(session_id, email or "", password or "")
            except AuthError as e:
                return (
                    dash.no_update,
                    dash.no_update,
                    dash.no_update,
                    True,
                    error_alert("Authentication failed", str(e)),
                )
            return (*_signed_in_outputs(user), False, None)

        # Page load: restore whoever is signed in on this session
        return (*_signed_in_outputs(auth.current_user(session_id)), False, None)

from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from autodash.config.model import AppSettings
from autodash.ui.ids import IDs


def build_auth_modal() -> dbc.Modal:
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Sign in")),
            dbc.ModalBody(
                [
                    dbc.Label("Name (new accounts only)"),
                    dbc.Input(id=IDs.Control.AUTH_NAME, type="text", className="mb-2"),
                    dbc.Label("Email"),
                    dbc.Input(id=IDs.Control.AUTH_EMAIL, type="email", className="mb-2"),
                    dbc.Label("Password"),
                    dbc.Input(id=IDs.Control.AUTH_PASSWORD, type="password", className="mb-2"),
                    html.Div(id=IDs.Control.AUTH_STATUS),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Register", id=IDs.Control.AUTH_REGISTER_BTN, color="secondary"),
                    dbc.Button("Sign in", id=IDs.Control.AUTH_LOGIN_BTN, color="primary"),
                ]
            ),
        ],
        id=IDs.Control.AUTH_MODAL,
        is_open=False,
    )


def build_navbar(settings: AppSettings) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(settings.ui_title, className="mb-0"),
                        html.Small(settings.subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    [
                        html.Span(id=IDs.Control.USER_BADGE, className="me-3"),
                        dbc.Button(
                            "Sign in",
                            id=IDs.Control.SIGN_IN_BTN,
                            color="primary",
                            size="sm",
                            className="me-2",
                        ),
                        dbc.Button(
                            "Sign out",
                            id=IDs.Control.SIGN_OUT_BTN,
                            color="secondary",
                            size="sm",
                            style={"display": "none"},
                        ),
                    ],
                    className="ms-auto d-flex align-items-center",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm adb-navbar",
    )

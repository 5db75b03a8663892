from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from autodash.importing.demo_templates import DemoTemplate
from autodash.importing.file_loader import SUPPORTED_EXTENSIONS
from autodash.ui.ids import IDs, template_card_id


def _template_card(template: DemoTemplate) -> dbc.Col:
    return dbc.Col(
        dbc.Card(
            dbc.CardBody(
                [
                    html.Div(template.icon, className="fs-1 mb-2"),
                    html.H5(template.name, className="card-title"),
                    html.P(template.description, className="card-text text-muted small"),
                    dbc.Button(
                        "Load template",
                        id=template_card_id(template.id),
                        color="link",
                        className="p-0",
                    ),
                ]
            ),
            className="h-100 adb-template-card",
        ),
        sm=6,
        lg=3,
        className="mb-3",
    )


def build_upload_panel(templates: List[DemoTemplate]) -> html.Div:
    accept = ",".join(sorted(SUPPORTED_EXTENSIONS))

    return html.Div(
        [
            dbc.Card(
                dbc.CardBody(
                    [
                        dcc.Upload(
                            id=IDs.Control.UPLOAD,
                            accept=accept,
                            multiple=False,
                            children=html.Div(
                                [
                                    html.H4("Upload your data file", className="mb-2"),
                                    html.P(
                                        "Drag and drop your CSV or Excel file here, or click to browse. "
                                        "Column types are detected automatically and charts are generated for you.",
                                        className="text-muted",
                                    ),
                                    html.Small("Supported formats: CSV, XLSX, XLS", className="text-muted"),
                                ],
                                className="text-center p-4",
                            ),
                            className="adb-upload",
                            style={
                                "borderWidth": "2px",
                                "borderStyle": "dashed",
                                "borderRadius": "16px",
                                "cursor": "pointer",
                            },
                        ),
                        html.Div(
                            [html.Span(dbc.Spinner(size="sm"), className="me-2"), "Processing your data..."],
                            id=IDs.Control.UPLOAD_BUSY,
                            className="text-center mt-3",
                            style={"display": "none"},
                        ),
                        html.Div(
                            [
                                html.Span(id=IDs.Control.FILE_NAME, className="fw-semibold me-3"),
                                dbc.Button(
                                    "Clear and upload new file",
                                    id=IDs.Control.CLEAR_BTN,
                                    color="secondary",
                                    outline=True,
                                    size="sm",
                                ),
                            ],
                            className="d-flex align-items-center justify-content-center mt-3",
                        ),
                        html.Div(id=IDs.Control.UPLOAD_STATUS),
                    ]
                ),
                className="mt-3",
            ),
            html.H4("Or try a demo template", className="text-center mt-4 mb-3"),
            dbc.Row([_template_card(t) for t in templates]),
        ]
    )

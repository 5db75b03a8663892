from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State
from dash.exceptions import PreventUpdate

from autodash.core.exceptions import AutodashError, UploadInProgressError
from autodash.importing.file_loader import decode_upload_contents
from autodash.ui.helpers import error_alert, get_session, success_alert
from autodash.ui.ids import IDs

if TYPE_CHECKING:
    from autodash.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_upload_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Browser session id (created once, kept in local storage)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.SESSION_ID, "data"),
        Input(IDs.Store.SESSION_ID, "modified_timestamp"),
        State(IDs.Store.SESSION_ID, "data"),
    )
    def ensure_session_id(_ts, session_id):
        if session_id:
            raise PreventUpdate
        return uuid.uuid4().hex

    # ---------------------------------------------------------
    # File upload -> parse -> replace current dataset
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATA_VERSION, "data", allow_duplicate=True),
        Output(IDs.Control.UPLOAD_STATUS, "children", allow_duplicate=True),
        Output(IDs.Control.FILE_NAME, "children", allow_duplicate=True),
        Input(IDs.Control.UPLOAD, "contents"),
        State(IDs.Control.UPLOAD, "filename"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.DATA_VERSION, "data"),
        running=[
            (Output(IDs.Control.UPLOAD, "disabled"), True, False),
            (Output(IDs.Control.UPLOAD_BUSY, "style"), {}, {"display": "none"}),
        ],
        prevent_initial_call=True,
    )
    def handle_upload(contents, filename, session_id, version):
        if not contents or not filename:
            raise PreventUpdate

        session = get_session(ctx, session_id)

        try:
            content = decode_upload_contents(contents)
            dataset = session.process_upload(filename, content)
        except UploadInProgressError as e:
            # The pending upload owns the file name; leave it alone
            return dash.no_update, error_alert("Upload ignored", str(e)), dash.no_update
        except AutodashError as e:
            return dash.no_update, error_alert("Error processing file", str(e)), ""
        except Exception:
            logger.exception("Unexpected error while processing upload", extra={"file_name": filename})
            return dash.no_update, error_alert("Error processing file", "Unknown error occurred"), ""

        return (
            (version or 0) + 1,
            success_alert(
                "Data loaded successfully!",
                f"Loaded {dataset.n_rows} rows with {dataset.n_columns} columns.",
            ),
            filename,
        )

    # ---------------------------------------------------------
    # Demo templates
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATA_VERSION, "data", allow_duplicate=True),
        Output(IDs.Control.UPLOAD_STATUS, "children", allow_duplicate=True),
        Output(IDs.Control.FILE_NAME, "children", allow_duplicate=True),
        Input({"type": IDs.Pattern.TEMPLATE_CARD, "index": ALL}, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.DATA_VERSION, "data"),
        prevent_initial_call=True,
    )
    def load_template(n_clicks, session_id, version):
        if not any(n_clicks or []):
            raise PreventUpdate

        triggered = dash.ctx.triggered_id
        if not isinstance(triggered, dict):
            raise PreventUpdate

        session = get_session(ctx, session_id)
        try:
            dataset = session.load_template(triggered["index"])
        except AutodashError as e:
            return dash.no_update, error_alert("Could not load template", str(e)), dash.no_update

        return (
            (version or 0) + 1,
            success_alert(
                "Demo template loaded!",
                f'Loaded "{dataset.name}" with {dataset.n_rows} rows.',
            ),
            dataset.name,
        )

    # ---------------------------------------------------------
    # Clear
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATA_VERSION, "data", allow_duplicate=True),
        Output(IDs.Control.UPLOAD_STATUS, "children", allow_duplicate=True),
        Output(IDs.Control.FILE_NAME, "children", allow_duplicate=True),
        Input(IDs.Control.CLEAR_BTN, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.DATA_VERSION, "data"),
        prevent_initial_call=True,
    )
    def clear_dataset(n_clicks, session_id, version):
        if not n_clicks:
            raise PreventUpdate
        get_session(ctx, session_id).clear()
        return (version or 0) + 1, None, ""

from __future__ import annotations

__all__ = ["IDs", "category_filter_id", "numeric_filter_id", "template_card_id", "chart_graph_id"]


class IDs:
    class Store:
        SESSION_ID = "session-id"
        DATA_VERSION = "data-version"
        FILTER_STATE = "filter-state"

    class Control:
        # Navbar / auth
        USER_BADGE = "user-badge"
        SIGN_IN_BTN = "sign-in-btn"
        SIGN_OUT_BTN = "sign-out-btn"
        AUTH_MODAL = "auth-modal"
        AUTH_NAME = "auth-name"
        AUTH_EMAIL = "auth-email"
        AUTH_PASSWORD = "auth-password"
        AUTH_LOGIN_BTN = "auth-login-btn"
        AUTH_REGISTER_BTN = "auth-register-btn"
        AUTH_STATUS = "auth-status"

        # Upload panel
        UPLOAD = "file-upload"
        UPLOAD_BUSY = "upload-busy"
        UPLOAD_STATUS = "upload-status"
        FILE_NAME = "file-name"
        CLEAR_BTN = "clear-file-btn"

        # Filters
        FILTER_PANEL = "filter-panel"
        FILTER_CONTROLS = "filter-controls"
        ACTIVE_FILTERS_BADGE = "active-filters-badge"
        RESET_FILTERS_BTN = "reset-filters-btn"
        DATE_RANGE = "date-range-filter"
        DATE_RANGE_CONTAINER = "date-range-container"
        DATE_COLUMNS_LABEL = "date-columns-label"

        # Dashboard
        STATS_BAR = "stats-bar"
        CHART_GRID = "chart-grid"
        DOWNLOAD_DATA = "download-data"
        DOWNLOAD_DATA_BTN = "download-data-btn"

    class Pattern:
        # pattern-matching "type" strings
        CATEGORY_FILTER = "category-filter"
        NUMERIC_FILTER = "numeric-filter"
        TEMPLATE_CARD = "template-card"
        CHART_GRAPH = "chart-graph"


def category_filter_id(column: str) -> dict:
    return {"type": IDs.Pattern.CATEGORY_FILTER, "column": column}


def numeric_filter_id(column: str) -> dict:
    return {"type": IDs.Pattern.NUMERIC_FILTER, "column": column}


def template_card_id(template_id: str) -> dict:
    return {"type": IDs.Pattern.TEMPLATE_CARD, "index": template_id}


def chart_graph_id(key: str) -> dict:
    return {"type": IDs.Pattern.CHART_GRAPH, "index": key}

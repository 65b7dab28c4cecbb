from __future__ import annotations

__all__ = ["IDs", "pattern_id"]


class IDs:
    class Store:
        FILTER_TREE = "filter-tree"
        LIST_STATE = "list-state"
        BULK_ACTION = "bulk-action"
        DATA_VERSION = "data-version"
        PENDING_DELETE = "pending-delete"

    class Control:
        # Analytics
        ANALYTICS_CARDS = "analytics-cards"
        ANALYTICS_CHART = "analytics-chart"
        ANALYTICS_DAYS = "analytics-days"

        # Toolbar
        RESULT_COUNT = "result-count"
        SEARCH_INPUT = "search-input"
        BATCH_SELECT = "batch-select"
        STAGE_SELECT = "stage-select"
        BULK_MENU = "bulk-menu"

        # Advanced filter modal
        FILTER_OPEN_BTN = "filter-open-btn"
        FILTER_MODAL = "filter-modal"
        FILTER_BUILDER = "filter-builder"
        FILTER_RESET_BTN = "filter-reset-btn"
        FILTER_SUMMARY = "filter-summary"

        # Bulk stage confirmation
        BULK_MODAL = "bulk-modal"
        BULK_MODAL_BODY = "bulk-modal-body"
        BULK_CONFIRM_BTN = "bulk-confirm-btn"
        BULK_CANCEL_BTN = "bulk-cancel-btn"

        # Master / detail
        APPLICANT_LIST = "applicant-list"
        PAGINATION = "applicant-pagination"
        DETAIL_PANEL = "detail-panel"

        # Delete confirmation
        DELETE_MODAL = "delete-modal"
        DELETE_CONFIRM_BTN = "delete-confirm-btn"
        DELETE_CANCEL_BTN = "delete-cancel-btn"

        # Custom report
        REPORT_OPEN_BTN = "report-open-btn"
        REPORT_MODAL = "report-modal"
        REPORT_PREVIEW = "report-preview"
        REPORT_DOWNLOAD_BTN = "report-download-btn"
        REPORT_DOWNLOAD = "report-download"

        # Notifications
        NOTICE = "notice"

    class Pattern:
        # pattern-matching "type" strings
        FB_ADD_RULE = "fb-add-rule"
        FB_ADD_GROUP = "fb-add-group"
        FB_REMOVE_GROUP = "fb-remove-group"
        FB_LOGIC = "fb-logic"
        FB_FIELD = "fb-field"
        FB_OPERATOR = "fb-operator"
        FB_VALUE = "fb-value"
        FB_REMOVE_RULE = "fb-remove-rule"

        APPLICANT_ROW = "applicant-row"
        BULK_STAGE = "bulk-stage"
        DETAIL_DELETE = "detail-delete"
        DETAIL_REGISTER = "detail-register"
        REPORT_FIELDS = "report-fields"


def pattern_id(kind: str, index: str) -> dict:
    return {"type": kind, "index": index}

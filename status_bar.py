import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, mode, file_path, search_text,
                  sort_key, sort_direction, page_index, page_total,
                  page_start, page_end, visible_rows, total_rows, poll_error
    """
    text = ""
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        mode = context.get("mode", "TABLE")
        fname = context.get("file_path") or ""
        if fname:
            fname = os.path.basename(fname)
        parts = [mode, fname] if fname else [mode]

        search = context.get("search_text") or ""
        if search:
            parts.append(f"/{search}")

        sort_key = context.get("sort_key")
        if sort_key:
            arrow = "desc" if context.get("sort_direction") == "desc" else "asc"
            parts.append(f"sort {sort_key} {arrow}")

        page_total = context.get("page_total", 1)
        page_index = context.get("page_index", 1)
        page_start = context.get("page_start", 0)
        page_end = context.get("page_end", page_start)
        visible = context.get("visible_rows", 0)
        total = context.get("total_rows", visible)
        if visible:
            rows_info = f"rows {page_start + 1}-{max(page_start + 1, page_end)} of {visible}"
        else:
            rows_info = "rows 0 of 0"
        if visible != total:
            rows_info += f" (filtered from {total})"
        parts.append(f"Page {page_index}/{page_total} {rows_info}")

        poll_error = context.get("poll_error")
        if poll_error:
            parts.append(f"poll failed: {poll_error}")
        text = " " + " | ".join(parts)

    return text.ljust(width)[:width]

import calendar
import csv
import io
import math

from django.conf import settings


def format_reference(prefix, pk):
    """Human readable reference: prefix + id zero padded to 6 digits (``MBU000042``)."""
    return f"{prefix}{int(pk):06d}"


def registration_reference(pk):
    return format_reference(settings.SCHOOL_CODE, pk)


def message_reference(pk):
    return format_reference("MSG", pk)


def paginate(queryset, page, limit):
    """Slice one page out of an already filtered queryset.

    The total is counted on the same queryset, so ``pages`` always agrees with
    the filter that produced the rows.

    :param queryset: filtered and ordered queryset
    :param page: 1-based page number
    :param limit: page size
    :return: (rows, pagination dict)
    """
    total = queryset.count()
    offset = (page - 1) * limit
    rows = list(queryset[offset : offset + limit])
    pagination = {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit),
    }
    return rows, pagination


def rows_to_csv(rows):
    """Render a list of dicts as CSV with a header row; every value is quoted."""
    headers = list(rows[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if row[header] is None else row[header] for header in headers])
    return buffer.getvalue()


def months_ago(moment, months):
    """Same day ``months`` calendar months earlier, clamped to the end of shorter months."""
    year, month = divmod(moment.year * 12 + moment.month - 1 - months, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)

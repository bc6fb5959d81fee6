"""
Payment cycle rules.

Work performed in month M is payable by the 15th of month M+1. Everything the
UI shows about "when will this month be paid" is derived here, on every read;
nothing in this module touches the database.

Payment status of a work month:
- paid              a matching payroll record is paid/received
- work_in_progress  the payment month has not started yet
- pending           inside the payment month, on or before the due date
- overdue           past the due date and still unpaid
"""
import enum
import logging
from datetime import date
from typing import Any, Iterable, List, NamedTuple, Optional, Union

from app.core.config import settings
from app.utils.date_format import month_name, parse_display_date
from app.utils.datetime_utils import today_local
from app.utils.enums import enum_to_str

logger = logging.getLogger(__name__)


class PaymentStatus(str, enum.Enum):
    WORK_IN_PROGRESS = "work_in_progress"
    PENDING = "pending"
    OVERDUE = "overdue"
    PAID = "paid"


SETTLED_PAYROLL_STATUSES = frozenset({"paid", "received"})
PAYROLL_CASH_FLOW_TYPES = frozenset({"cleaner_payroll", "internal_payroll"})


class WorkMonthKey(NamedTuple):
    """Typed lookup key for the payroll record of one employee's work month."""
    employee_id: int
    year: int
    month: int


def _check_month(work_month: int) -> None:
    if not 1 <= work_month <= 12:
        raise ValueError(f"work_month must be between 1 and 12, got {work_month}")


def payment_due_date(work_year: int, work_month: int, due_day: Optional[int] = None) -> date:
    """Due date for a work month: the 15th (PAYMENT_DUE_DAY) of the following month."""
    _check_month(work_month)
    if due_day is None:
        due_day = settings.PAYMENT_DUE_DAY
    if work_month == 12:
        return date(work_year + 1, 1, due_day)
    return date(work_year, work_month + 1, due_day)


def payment_month_start(work_year: int, work_month: int) -> date:
    """First day of the month in which a work month is paid."""
    return payment_due_date(work_year, work_month).replace(day=1)


def is_settled(record: Any) -> bool:
    return enum_to_str(getattr(record, "status", None)) in SETTLED_PAYROLL_STATUSES


def find_payroll_matches(
    payrolls: Iterable[Any],
    name: str,
    work_year: int,
    work_month: int,
    employee_id: Optional[int] = None,
) -> List[Any]:
    """
    Payroll records that pay for the given work month.

    A record with a work_year must be for that year. When the caller knows the
    employee_id, records written with an employee_id match on the
    (employee_id, year, month) key alone, so a renamed employee still matches
    and a namesake does not. Records without an employee_id match on exact
    display name and long month name.
    """
    _check_month(work_month)
    wanted_month = month_name(work_month)
    key = WorkMonthKey(employee_id, work_year, work_month) if employee_id is not None else None

    matches = []
    for record in payrolls:
        if enum_to_str(getattr(record, "type_of_cash_flow", None)) not in PAYROLL_CASH_FLOW_TYPES:
            continue
        if getattr(record, "month", None) != wanted_month:
            continue

        record_employee = getattr(record, "employee_id", None)
        record_year = getattr(record, "work_year", None)
        if record_year is not None and record_year != work_year:
            continue

        if employee_id is not None and record_employee is not None:
            # Keyed: the id decides, whatever name the record was written under
            if WorkMonthKey(record_employee, work_year, work_month) == key:
                matches.append(record)
            continue

        if getattr(record, "name", None) != name:
            continue
        matches.append(record)
    return matches


def _status_from_dates(due: date, today: date) -> PaymentStatus:
    if today < due.replace(day=1):
        return PaymentStatus.WORK_IN_PROGRESS
    if due < today:
        return PaymentStatus.OVERDUE
    return PaymentStatus.PENDING


def resolve_payment_status(
    name: str,
    work_year: int,
    work_month: int,
    payrolls: Iterable[Any],
    today: Optional[date] = None,
    employee_id: Optional[int] = None,
) -> PaymentStatus:
    """
    Derive the payment status of one employee's work month.

    A settled matching record wins regardless of dates. Otherwise the status
    follows the due date, always the 15th of the following month. A matching
    record whose payment_date is present but does not parse never produces
    OVERDUE.
    """
    if today is None:
        today = today_local()

    matches = find_payroll_matches(payrolls, name, work_year, work_month, employee_id=employee_id)
    if len(matches) > 1:
        logger.warning(
            "Ambiguous payroll match: %d records for name=%r employee_id=%s month=%04d-%02d",
            len(matches), name, employee_id, work_year, work_month,
        )

    if any(is_settled(record) for record in matches):
        return PaymentStatus.PAID

    due = payment_due_date(work_year, work_month)
    status = _status_from_dates(due, today)

    # payment_date records when the money moved; it never moves the deadline
    recorded = [getattr(record, "payment_date", None) for record in matches]
    malformed = [value for value in recorded if value and parse_display_date(value) is None]
    if malformed and status == PaymentStatus.OVERDUE:
        logger.info("Unparseable payment_date %r; not reporting work month as overdue", malformed[0])
        return PaymentStatus.PENDING
    return status


def resolve_invoice_status(issue_date: Union[str, date, None], today: Optional[date] = None) -> str:
    """
    Status of an unpaid invoice from its issue date.

    An invoice issued in month M is pending until the 15th of M+1 and overdue
    from that day on. Missing or unparseable issue dates stay pending.
    """
    issued = parse_display_date(issue_date)
    if issued is None:
        if issue_date:
            logger.warning("Invalid invoice issue date format: %r", issue_date)
        return PaymentStatus.PENDING.value

    if today is None:
        today = today_local()

    overdue_from = payment_due_date(issued.year, issued.month)
    if today < overdue_from.replace(day=1):
        return PaymentStatus.PENDING.value
    if today >= overdue_from:
        return PaymentStatus.OVERDUE.value
    return PaymentStatus.PENDING.value

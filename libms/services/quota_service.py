from datetime import datetime

from libms.repositories.borrowing_request_repo import BorrowingRequestRepo
from libms.utils.clock import to_naive_utc


class QuotaCounter:
    @staticmethod
    def month_window(reference: datetime) -> tuple[datetime, datetime]:
        """[first instant of reference's UTC month, first instant of the next month)"""
        ref = to_naive_utc(reference)
        start = ref.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        if start.month == 12:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
        return start, end

    @staticmethod
    def count_this_month(user_id: str, reference: datetime) -> int:
        start, end = QuotaCounter.month_window(reference)
        return BorrowingRequestRepo.count_between(user_id, start, end)

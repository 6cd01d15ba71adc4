from .notice_queue import NoticeDismissal, NoticeQueue, user_notices_option

__all__ = ["NoticeDismissal", "NoticeQueue", "user_notices_option"]

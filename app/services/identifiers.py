"""Public identifiers for applications, payments and support tickets."""

import random
import time
from datetime import datetime


def _digits(count: int) -> str:
    return str(random.randint(0, 10 ** count - 1)).zfill(count)


def generate_application_id(now: datetime = None) -> str:
    """APP-<yyyymm>-<6 digits>"""
    now = now or datetime.now()
    return f"APP-{now:%Y%m}-{_digits(6)}"


def generate_payment_id() -> str:
    """PAY-<epoch ms>-<6 digits>"""
    return f"PAY-{int(time.time() * 1000)}-{_digits(6)}"


def generate_ticket_id() -> str:
    """TKT-<epoch ms>-<4 digits>"""
    return f"TKT-{int(time.time() * 1000)}-{_digits(4)}"

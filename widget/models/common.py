"""Common types and user-facing strings shared across the widget."""

import asyncio
from collections.abc import Callable, Coroutine
from enum import StrEnum
from typing import Any, TypeAlias

# Schedules a coroutine on the session's event loop and tracks the task.
Spawn: TypeAlias = Callable[[Coroutine[Any, Any, None]], asyncio.Task]


class Metric(StrEnum):
    TEMPERATURE = "Temperature"
    UV_INDEX = "UV Index"
    HUMIDITY = "Humidity"


# Single fixed locale (vi-VN) for every label the user sees.
MSG_CITY_NOT_FOUND = "Không tìm thấy thành phố. Vui lòng nhập tên thành phố hợp lệ."
MSG_FETCH_FAILED = "Đã xảy ra lỗi khi lấy dữ liệu thời tiết."
MSG_CITY_REQUIRED = "Vui lòng nhập tên thành phố."
LABEL_LOADING = "Đang tải..."
LABEL_TODAY = "Hôm nay"

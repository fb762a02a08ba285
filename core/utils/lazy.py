"""
단일 실행(single-flight) 지연 초기화

최초 접근 시점에 한 번만 초기화 함수를 실행하고,
동시에 들어온 호출자 모두에게 같은 결과를 돌려준다.

사용 예시:
```python
async def open_db() -> SQLiteAdapter:
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()
    await init_schema(adapter)
    return adapter

lazy_db = AsyncLazy(open_db)
db = await lazy_db.get()  # 최초 호출 시에만 open_db() 실행
```
"""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncLazy(Generic[T]):
    """비동기 지연 초기화 셀

    - 초기화 함수는 동시 최초 호출이 몇 개든 한 번만 실행
    - 초기화 실패 시 대기 중인 모든 호출자에게 같은 예외 전파
    - 실패 결과는 캐시하지 않음 (다음 호출에서 재시도)

    Args:
        factory: 결과를 만드는 코루틴 함수
    """

    def __init__(self, factory: Callable[[], Awaitable[T]]):
        self._factory = factory
        self._lock = asyncio.Lock()
        self._task: asyncio.Task[T] | None = None
        self._value: T | None = None
        self._ready = False

    @property
    def is_ready(self) -> bool:
        """초기화 완료 여부"""
        return self._ready

    async def get(self) -> T:
        """초기화된 값 반환 (필요 시 초기화)"""
        if self._ready:
            return self._value  # type: ignore[return-value]

        async with self._lock:
            if self._ready:
                return self._value  # type: ignore[return-value]
            if self._task is None:
                logger.debug("지연 초기화 시작")
                self._task = asyncio.ensure_future(self._factory())
            task = self._task

        # 락 밖에서 대기: 모든 호출자가 같은 Task를 await
        try:
            value = await asyncio.shield(task)
        except BaseException:
            async with self._lock:
                if self._task is task and task.done():
                    self._task = None
            raise

        async with self._lock:
            if self._task is task:
                self._value = value
                self._ready = True
                self._task = None
        return value

    async def reset(self) -> T | None:
        """초기화 상태를 비우고 기존 값 반환

        진행 중인 초기화가 있으면 완료를 기다린 뒤 비운다.
        """
        async with self._lock:
            task = self._task
        if task is not None:
            await asyncio.wait([task])

        async with self._lock:
            value = self._value if self._ready else None
            if value is None and task is not None and not task.cancelled() and task.exception() is None:
                value = task.result()
            self._value = None
            self._ready = False
            self._task = None
        return value

"""
Bounded-concurrency fan-out with per-task error isolation
"""

import logging
import asyncio
from typing import List, Any, Callable, Optional, Awaitable
from pydantic import BaseModel, ConfigDict
from tqdm.asyncio import tqdm



class TaskOutcome(BaseModel):
    """Result of one task: either a value or the exception it raised"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: int
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchProcessor:
    """Runs independent async tasks under a concurrency limit"""

    def __init__(self, max_concurrent: int = 5, logger: Optional[logging.Logger] = None):
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be >= 1, got {max_concurrent}")
        self.max_concurrent = max_concurrent
        self.logger = logger or logging.getLogger(__name__)

    async def process_batch(
        self,
        items: List[Any],
        process_fn: Callable[[Any], Awaitable[Any]],
        show_progress: bool = False
    ) -> List[TaskOutcome]:
        """
        Process items concurrently, isolating failures.

        A failing item yields a TaskOutcome carrying its exception; the other
        items are unaffected.

        Args:
            items: Items to process
            process_fn: Async function to process each item
            show_progress: Whether to show a tqdm progress bar

        Returns:
            One TaskOutcome per item, in input order regardless of completion order
        """
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def process_with_semaphore(index: int, item: Any) -> TaskOutcome:
            async with semaphore:
                try:
                    return TaskOutcome(index=index, value=await process_fn(item))
                except Exception as e:
                    self.logger.warning(f"Task {index} failed: {e}")
                    return TaskOutcome(index=index, error=e)

        tasks = [process_with_semaphore(i, item) for i, item in enumerate(items)]

        if show_progress:
            outcomes = []
            for coro in tqdm.as_completed(tasks, total=len(tasks)):
                outcomes.append(await coro)
            outcomes.sort(key=lambda outcome: outcome.index)
        else:
            outcomes = list(await asyncio.gather(*tasks))

        return outcomes
